# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

from spunj.cli.main import build_parser, main


def test_build_parser():
    parser = build_parser()
    args = parser.parse_args(["--delimiter", "|", "parse", "a=1", "--key", "a", "--key", "b"])
    assert args.command == "parse"
    assert args.delimiter == "|"
    assert args.keys == ["a", "b"]

    args = parser.parse_args(["merge", '{"a": ["1"]}'])
    assert args.query == ""


def test_merge_command(capsys):
    filters = json.dumps({"first": ["one"], "last": ["deux", "trois"]})
    assert main(["merge", filters, "?foo=bar,baz&first=nope&something=true"]) == 0
    out = capsys.readouterr().out
    assert out == "foo=bar%2Cbaz&first=one&something=true&last=deux%2Ctrois\n"


def test_url_command_with_delimiter(capsys):
    assert main(["--delimiter", "|", "url", '{"tag": ["a", "b"]}', "https://example.com/s?q=x"]) == 0
    assert capsys.readouterr().out == "https://example.com/s?q=x&tag=a%7Cb\n"


def test_parse_command(capsys):
    assert main(["parse", "tag=a,b&q=x", "--key", "tag"]) == 0
    assert json.loads(capsys.readouterr().out) == {"tag": ["a", "b"]}


def test_invalid_filters_exit_with_reason(capsys):
    assert main(["merge", '{"tag": "a"}']) == 2
    err = capsys.readouterr().err
    assert "Could not decode filter state" in err

    assert main(["merge", "not json"]) == 2
    assert "[spunj]" in capsys.readouterr().err


def test_malformed_url_exits_with_reason(capsys):
    assert main(["url", '{"k": ["v"]}', "http://[::1"]) == 2
    err = capsys.readouterr().err
    assert "Could not decode filter state" in err
    assert "invalid URL" in err
