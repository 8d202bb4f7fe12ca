"""
Command line: test_cli.py

cli.py:
  - headers prints "index<TAB>name" per header
  - rows prints CSV by default, JSON lines with --format json
  - rows --fields selects columns; unknown field exits 1
  - validate exits 0 with a ✓ line on a clean file
  - validate exits 1 on misaligned rows or blank headers
  - missing source exits 1
  - invalid delimiter / encoding / non-integer row env exits 2
  - a backslash works as the delimiter, from flags and env
  - escaped delimiters (\\t) are understood
  - CSV_* environment variables and a .env in the working directory are
    honoured, flags win over them
  - argparse rejects a missing --source and a missing subcommand
"""

from __future__ import annotations

import json

import pytest

from csvcursor.cli import _build_parser, run


ENV_KEYS = (
    "CSV_FIELD_DELIMITER",
    "CSV_TEXT_QUALIFIER",
    "CSV_ROW_DELIMITER",
    "CSV_FIELD_NAME_ROW",
    "CSV_FIRST_DATA_ROW",
    "CSV_ENCODING_TYPE",
    "CSV_ANSI_ENCODING",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # keep load_dotenv() away from any .env in the repo
    monkeypatch.chdir(tmp_path)


def write_lines(path, lines: list[str]) -> str:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)


# ============================================================================
# headers / rows
# ============================================================================

class TestHeadersAndRows:
    def test_headers(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id,name", "1,Alice"])
        assert run(["headers", "--source", src]) == 0
        assert capsys.readouterr().out == "0\tid\n1\tname\n"

    def test_rows_csv(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ['id,name', '1,"Smith, Ann"'])
        assert run(["rows", "--source", src, "--qualifier", '"']) == 0
        assert capsys.readouterr().out == '1,"Smith, Ann"\n'

    def test_rows_json(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id,name", "1,Alice", "2,Bob"])
        assert run(["rows", "--source", src, "--format", "json"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line) for line in lines] == [
            {"id": "1", "name": "Alice"},
            {"id": "2", "name": "Bob"},
        ]

    def test_rows_selected_fields(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id,name,city", "1,Alice,Oslo"])
        assert run(["rows", "--source", src, "--fields", "city, ID"]) == 0
        assert capsys.readouterr().out == "Oslo,1\n"

    def test_rows_unknown_field(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id,name", "1,Alice"])
        assert run(["rows", "--source", src, "--fields", "phone"]) == 1
        assert "phone" in capsys.readouterr().err

    def test_tab_delimiter_escape(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.tsv", ["id\tname", "1\tAlice"])
        assert run(["rows", "--source", src, "--delimiter", "\\t", "--format", "json"]) == 0
        assert json.loads(capsys.readouterr().out) == {"id": "1", "name": "Alice"}

    def test_env_config(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("CSV_FIELD_DELIMITER", ";")
        src = write_lines(tmp_path / "p.csv", ["id;name", "1;Alice"])
        assert run(["headers", "--source", src]) == 0
        assert capsys.readouterr().out == "0\tid\n1\tname\n"

    def test_dotenv_in_working_directory(self, tmp_path, capsys):
        (tmp_path / ".env").write_text("CSV_FIELD_DELIMITER=|\n", encoding="utf-8")
        src = write_lines(tmp_path / "p.csv", ["id|name", "1|Alice"])
        assert run(["headers", "--source", src]) == 0
        assert capsys.readouterr().out == "0\tid\n1\tname\n"

    def test_flag_beats_env(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("CSV_FIELD_DELIMITER", ";")
        src = write_lines(tmp_path / "p.csv", ["id|name", "1|Alice"])
        assert run(["headers", "--source", src, "--delimiter", "|"]) == 0
        assert capsys.readouterr().out == "0\tid\n1\tname\n"


# ============================================================================
# validate
# ============================================================================

class TestValidate:
    def test_clean_file(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id,name", "1,Alice", "2,Bob"])
        assert run(["validate", "--source", src]) == 0
        out = capsys.readouterr().out
        assert "valid" in out
        assert "2 row(s)" in out

    def test_misaligned_rows(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id,name", "1", "2,Bob"])
        assert run(["validate", "--source", src]) == 1
        assert "1 misaligned row(s)" in capsys.readouterr().err

    def test_blank_header(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id,,name", "1,2,3"])
        assert run(["validate", "--source", src]) == 1
        assert "blank" in capsys.readouterr().err

    def test_empty_file(self, tmp_path, capsys):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        assert run(["validate", "--source", str(path)]) == 1
        assert "no headers" in capsys.readouterr().err


# ============================================================================
# Errors and argparse contract
# ============================================================================

class TestErrors:
    def test_missing_source_file(self, tmp_path, capsys):
        assert run(["headers", "--source", str(tmp_path / "nope.csv")]) == 1
        assert "File not exists" in capsys.readouterr().err

    def test_bad_delimiter_exits_2(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id,name"])
        assert run(["headers", "--source", src, "--delimiter", "::"]) == 2
        assert "ERROR" in capsys.readouterr().err

    def test_bad_encoding_exits_2(self, tmp_path):
        src = write_lines(tmp_path / "p.csv", ["id,name"])
        assert run(["headers", "--source", src, "--encoding", "ebcdic"]) == 2

    def test_backslash_delimiter(self, tmp_path, capsys):
        src = write_lines(tmp_path / "p.csv", ["id\\name", "1\\Alice"])
        assert run(["headers", "--source", src, "--delimiter", "\\"]) == 0
        assert capsys.readouterr().out == "0\tid\n1\tname\n"

    def test_backslash_delimiter_env(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("CSV_FIELD_DELIMITER", "\\")
        src = write_lines(tmp_path / "p.csv", ["id\\name", "1\\Alice"])
        assert run(["headers", "--source", src]) == 0
        assert capsys.readouterr().out == "0\tid\n1\tname\n"

    def test_non_integer_row_env_exits_2(self, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("CSV_FIRST_DATA_ROW", "abc")
        src = write_lines(tmp_path / "p.csv", ["id,name"])
        assert run(["headers", "--source", src]) == 2
        assert "first_data_row" in capsys.readouterr().err

    def test_missing_source_arg(self):
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args(["rows"])
        assert exc_info.value.code != 0

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc_info:
            _build_parser().parse_args([])
        assert exc_info.value.code != 0
