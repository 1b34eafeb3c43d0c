from __future__ import annotations

from pathlib import Path

from case_converter.cli import main as cli_main


def test_debug_flag_emits_debug_lines(write_input, flat_csv_text, capsys):
    path = write_input("export.csv", flat_csv_text)
    code = cli_main([str(path), "--debug"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG header row located at line 3" in out


def test_without_debug_no_debug_lines(write_input, flat_csv_text, capsys):
    path = write_input("export.csv", flat_csv_text)
    assert cli_main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "DEBUG" not in out
    assert "Conversion complete. Output written to" in out


def test_env_file_selects_config(temp_workdir: Path, write_input, capsys):
    (temp_workdir / "custom.yml").write_text("output_suffix: _env\n", encoding="utf-8")
    (temp_workdir / ".env").write_text("CASE_CONVERTER_CONFIG=custom.yml\n", encoding="utf-8")
    path = write_input("e.csv", "Case ID,Case,Folder\n1,a,f\n")
    try:
        assert cli_main([str(path)]) == 0
    finally:
        import os
        os.environ.pop("CASE_CONVERTER_CONFIG", None)
    assert path.with_name("e_env.csv").exists()


def test_unknown_encoding_in_config_is_one_diagnostic(temp_workdir: Path, write_input, capsys):
    cfg = temp_workdir / "bad.yml"
    cfg.write_text("encoding: no-such-codec\n", encoding="utf-8")
    first = write_input("a.csv", "Case ID,Case,Folder\n1,a,f\n")
    second = write_input("b.csv", "Case ID,Case,Folder\n2,b,g\n")
    code = cli_main([str(first), str(second), "--config", str(cfg)])
    err = capsys.readouterr().err
    assert code == 1
    assert "unknown encoding: no-such-codec" in err
    assert not first.with_name("a_Testomatio.csv").exists()


def test_summary_line_has_single_prefix(write_input, flat_csv_text, capsys):
    path = write_input("export.csv", flat_csv_text)
    assert cli_main([str(path)]) == 0
    out = capsys.readouterr().out
    summary = [line for line in out.splitlines() if "files=1/1" in line]
    assert len(summary) == 1
    assert summary[0].startswith("SUMMARY files=1/1 success=1 failed=0 cases=2 ")
    assert summary[0].count("SUMMARY") == 1
