# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from case_converter.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logging():
    # 各テストで stdout/stderr ハンドラを capsys の差し替え後に作り直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CASE_CONVERTER_CONFIG", raising=False)
        yield p


@pytest.fixture()
def flat_csv_text() -> str:
    return (
        "Export of project DEMO\n"
        "Generated: 2024-05-01;by admin\n"
        "Case ID,Case,Folder,Priority,Tags,Created by,Pre-condition,Description,Expected,Test Type\n"
        '7,"Login works","Auth",P0-Critical,"smoke,auth",alice,"<p>User exists</p>",'
        '"Open page<br>Enter creds","<ul><li>Dashboard shown</li><li>No errors</li></ul>",Functional\n'
        '42,Logout,Auth,P4-Low,,bob,,,,\n'
    )


@pytest.fixture()
def grouped_csv_text() -> str:
    return (
        "Entity Key,Test Case Summary,Test Case Folder Path,Test Case Priority,Label(s),"
        "Created By,Step Description,Step Expected Outcome(Plain Text)\n"
        '123,Checkout,/Shop/Cart,Blocker,"cart, payment",Jane Doe [jane@example.com],'
        '"Preconditions: must be logged in",\n'
        ',,,,,,Click buy,Order confirmed\n'
        ',,,,,,Close tab,\n'
        '124,Browse,/Shop,Trivial,,John,Open catalog,Catalog visible\n'
    )


@pytest.fixture()
def write_input(temp_workdir: Path):
    def _write(name: str, text: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_format: auto
output_suffix: _Testomatio
encoding: utf-8-sig
priority_maps:
  flat:
    P5-Trivial: low
  grouped:
    Major: high
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "convert.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
