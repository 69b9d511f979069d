"""
Integration tests for CLI.
"""

import json
from pathlib import Path

from csvtable.cli import main, parse_args


FIXTURES = Path(__file__).parent.parent / "fixtures"


class TestParseArgs:
    def test_defaults(self):
        args = parse_args(["data.csv"])
        assert args.file == "data.csv"
        assert args.field_delimiter is None
        assert args.row_delimiter is None
        assert args.legacy_offsets is None
        assert args.first_row is False
        assert args.output is None
        assert args.debug is False

    def test_delimiter_escapes(self):
        args = parse_args(["data.csv", "-f", "\\t", "-r", "\\r\\n"])
        assert args.field_delimiter == "\t"
        assert args.row_delimiter == "\r\n"

    def test_conversion_flags(self):
        args = parse_args(["in.csv", "-o", "out.csv", "--to-field", ",", "--to-row", "\\r\\n"])
        assert args.output == "out.csv"
        assert args.to_field == ","
        assert args.to_row == "\r\n"


class TestMain:
    def test_prints_rows_as_json(self, capsys):
        exit_code = main([str(FIXTURES / "sample.csv")])
        assert exit_code == 0
        lines = capsys.readouterr().out.strip().split("\n")
        assert len(lines) == 4
        assert json.loads(lines[1]) == ["1", "Ada", "London"]

    def test_first_row(self, capsys):
        exit_code = main([str(FIXTURES / "sample.csv"), "--first-row"])
        assert exit_code == 0
        out = capsys.readouterr().out.strip()
        assert json.loads(out) == ["id", "name", "city"]

    def test_custom_delimiters(self, capsys):
        exit_code = main([str(FIXTURES / "crlf.csv"), "-f", ",", "-r", "\\r\\n"])
        assert exit_code == 0
        lines = capsys.readouterr().out.strip().split("\n")
        assert [json.loads(line) for line in lines] == [["id", "name"], ["1", "Ada"], ["2", "Linus"]]

    def test_legacy_offsets_flag(self, tmp_path, capsys):
        path = tmp_path / "lead.csv"
        path.write_text(";b;c\n")
        assert main([str(path), "--legacy-offsets"]) == 0
        assert json.loads(capsys.readouterr().out) == ["", ";b", "c"]

    def test_convert(self, tmp_path):
        out = tmp_path / "out.csv"
        exit_code = main([
            str(FIXTURES / "sample.csv"),
            "-o", str(out),
            "--to-field", ",",
            "--to-row", "\\r\\n",
        ])
        assert exit_code == 0
        assert out.read_bytes().startswith(b"id,name,city\r\n1,Ada,London\r\n")

    def test_convert_keeps_input_delimiters_by_default(self, tmp_path):
        out = tmp_path / "copy.csv"
        assert main([str(FIXTURES / "sample.csv"), "-o", str(out)]) == 0
        assert out.read_text() == (FIXTURES / "sample.csv").read_text()

    def test_file_not_found(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing.csv")])
        assert exit_code == 1
        assert "Error" in capsys.readouterr().err

    def test_first_row_file_not_found(self, tmp_path, capsys):
        exit_code = main([str(tmp_path / "missing.csv"), "--first-row"])
        assert exit_code == 1
        assert "Couldn't open" in capsys.readouterr().err

    def test_write_failure(self, tmp_path, capsys):
        exit_code = main([str(FIXTURES / "sample.csv"), "-o", str(tmp_path / "no" / "dir.csv")])
        assert exit_code == 1
        assert "Error" in capsys.readouterr().err
