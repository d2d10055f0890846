"""
Tests for the command-line interface.
"""

import io
import zipfile
from pathlib import Path

import pytest

from domain_sifter.audit_logger import AuditLogger
from domain_sifter.cli import create_parser, format_error_chain, main, report_fatal
from domain_sifter.enums import LogLevel
from domain_sifter.exceptions import InputError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["DOMAIN_SIFTER_LANG", "DOMAIN_SIFTER_HTTP_TIMEOUT", "DOMAIN_SIFTER_REQUEST_DELAY"]:
        monkeypatch.delenv(name, raising=False)


class TestParser:
    def test_default_paths(self) -> None:
        parser = create_parser()
        assert parser.parse_args(["check-all"]).output == "potential_domains.csv"
        assert parser.parse_args(["check-registry"]).output == "available_fr_domains.csv"
        args = parser.parse_args(["rank"])
        assert (args.input, args.output, args.top) == ("domains.csv", "best_domains.csv", 10)

    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out


class TestRankCommand:
    def test_rank(self, tmp_path: Path, capsys) -> None:
        input_path = tmp_path / "domains.csv"
        output_path = tmp_path / "best.csv"
        input_path.write_text("web.com\nstrndl.com\n", encoding="utf-8")

        assert main(["rank", str(input_path), str(output_path)]) == 0

        assert output_path.read_text(encoding="utf-8").splitlines() == [
            "domain,score",
            "web.com,61",
        ]
        assert "1. web.com (score: 61)" in capsys.readouterr().out

    def test_missing_input_exits_non_zero(self, tmp_path: Path, capsys) -> None:
        code = main(["rank", str(tmp_path / "nope.csv"), str(tmp_path / "out.csv"), "-l", "fr"])
        assert code == 1
        err = capsys.readouterr().err
        assert err.startswith("Erreur : Unable to open input file")
        assert "FileNotFoundError" in err
        assert '"code": "file_not_found"' in err


class TestGenerateCommand:
    def test_generate(self, tmp_path: Path, capsys) -> None:
        archive = tmp_path / "domains.zip"
        code = main(["generate", "1", "fr,.com", "-o", str(archive), "--max-rows", "20"])

        assert code == 0
        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == [f"domains_part_{i}.csv" for i in range(1, 4)]
        out = capsys.readouterr().out
        assert "Generating 52 domain(s)..." in out
        assert "File 1 written (20/52 domains)" in out
        assert "File 2 written (40/52 domains)" in out
        assert "File 3 written (52/52 domains)" in out
        assert "Total domains: 52" in out

    def test_invalid_length(self, tmp_path: Path, capsys) -> None:
        code = main(["generate", "9", "fr", "-o", str(tmp_path / "d.zip")])
        assert code == 1
        assert "Length must be between 1 and 6" in capsys.readouterr().err
        assert not (tmp_path / "d.zip").exists()


class TestConfigCommand:
    def test_init_show_validate(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "config.json"

        assert main(["config", "init", "-p", str(path), "-l", "fr"]) == 0
        assert main(["config", "init", "-p", str(path)]) == 1
        assert main(["config", "show", "-p", str(path)]) == 0
        assert main(["config", "validate", "-p", str(path)]) == 0

        out = capsys.readouterr().out
        assert "Language: fr" in out
        assert "Registry suffix: .fr" in out
        assert "is valid" in out

    def test_validate_broken_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{broken")
        assert main(["config", "validate", "-p", str(path)]) == 1

    def test_unknown_config_for_command(self, tmp_path: Path, capsys) -> None:
        code = main(["rank", "-c", str(tmp_path / "absent.json")])
        assert code == 1
        assert "Could not load config" in capsys.readouterr().err


class TestErrorChain:
    def test_causes_are_listed(self) -> None:
        try:
            try:
                raise FileNotFoundError("domains.csv")
            except FileNotFoundError as e:
                raise InputError(code="file_not_found", message="Unable to open input file") from e
        except InputError as error:
            lines = format_error_chain(error, "en")

        assert lines == [
            "Error: Unable to open input file",
            "  caused by: FileNotFoundError: domains.csv",
        ]

    def test_fatal_error_is_logged_with_its_fields(self, capsys) -> None:
        logger = AuditLogger(output_format="json", output_stream=io.StringIO())
        error = InputError(
            code="empty_record",
            message="Empty record at line 2 of domains.csv",
            details={"path": "domains.csv", "line": 2},
        )

        assert report_fatal(error, "en", logger) == 1

        assert capsys.readouterr().err == "Error: Empty record at line 2 of domains.csv\n"
        [entry] = logger.entries
        assert entry.level == LogLevel.ERROR
        assert entry.data == {
            "error_type": "InputError",
            "code": "empty_record",
            "message": "Empty record at line 2 of domains.csv",
            "details": {"path": "domains.csv", "line": 2},
        }
