from __future__ import annotations

import pandas as pd

from case_converter.cli import main as cli_main

HEADER = (
    "Entity Key,Test Case Summary,Test Case Folder Path,Test Case Priority,Label(s),"
    "Created By,Step Description,Step Expected Outcome(Plain Text)\n"
)


def _read_output(path):
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def test_scenario_c_steps_fold_into_one_case(write_input):
    path = write_input(
        "c.csv", HEADER + "123,Checkout,,,,,,\n,,,,,,Click buy,Order confirmed\n"
    )
    assert cli_main([str(path)]) == 0
    df = _read_output(path.with_name("c_Testomatio.csv"))
    assert len(df) == 1
    row = df.iloc[0]
    assert row["ID"] == "TS123"
    assert "## Steps" in row["Description"]
    assert "* Click buy" in row["Description"]
    assert "*Expected:* Order confirmed" in row["Description"]


def test_scenario_d_precondition_row(write_input):
    path = write_input(
        "d.csv", HEADER + '9,Login,,,,,"Preconditions: must be logged in",\n'
    )
    assert cli_main([str(path)]) == 0
    description = _read_output(path.with_name("d_Testomatio.csv")).iloc[0]["Description"]
    assert description == "## Precondition\nmust be logged in"


def test_full_grouped_export(write_input, grouped_csv_text, capsys):
    path = write_input("steps.csv", grouped_csv_text)
    assert cli_main([str(path)]) == 0
    assert "2 test cases processed" in capsys.readouterr().out
    df = _read_output(path.with_name("steps_Testomatio.csv"))
    assert df["ID"].tolist() == ["TS123", "TS124"]
    first, second = df.iloc[0], df.iloc[1]
    assert first["Title"] == "Checkout"
    assert first["Folder"] == "/Shop/Cart"
    assert first["Priority"] == "high"
    assert first["Tags"] == "cart,payment"
    assert first["Owner"] == "Jane Doe"
    assert first["Description"] == (
        "## Precondition\nmust be logged in\n"
        "## Steps\n* Click buy\n  *Expected:* Order confirmed\n* Close tab"
    )
    assert second["Priority"] == "low"
    assert second["Description"] == "## Steps\n* Open catalog\n  *Expected:* Catalog visible"


def test_orphan_step_row_fails_without_output(write_input, capsys):
    path = write_input("orphan.csv", HEADER + ",,,,,,Click buy,\n1,A,,,,,,\n")
    assert cli_main([str(path)]) == 1
    assert "ORPHAN_STEP_ROW" in capsys.readouterr().err
    assert not path.with_name("orphan_Testomatio.csv").exists()
