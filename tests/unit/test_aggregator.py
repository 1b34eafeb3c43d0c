from __future__ import annotations

import pytest

from case_converter.errors import MalformedFieldError, OrphanStepRowError
from case_converter.models.case_record import Priority
from case_converter.models.raw_row import RawRow
from case_converter.services.aggregator import AggregatorState, aggregate_cases, step


def _row(n: int, **values: str) -> RawRow:
    mapping = {
        "key": "Entity Key",
        "summary": "Test Case Summary",
        "folder": "Test Case Folder Path",
        "priority": "Test Case Priority",
        "labels": "Label(s)",
        "created_by": "Created By",
        "step": "Step Description",
        "expected": "Step Expected Outcome(Plain Text)",
    }
    return RawRow(row_number=n, values={mapping[k]: v for k, v in values.items()})


def test_case_row_followed_by_step_row():
    rows = [
        _row(1, key="123", summary="Checkout"),
        _row(2, step="Click buy", expected="Order confirmed"),
    ]
    cases = aggregate_cases(rows)
    assert len(cases) == 1
    case = cases[0]
    assert case.id == "TS123"
    assert "## Steps" in case.description
    assert "* Click buy" in case.description
    assert "*Expected:* Order confirmed" in case.description
    assert case.description == "## Steps\n* Click buy\n  *Expected:* Order confirmed"


def test_precondition_row_is_not_a_step():
    rows = [_row(1, key="9", summary="Login", step="Preconditions: must be logged in")]
    case = aggregate_cases(rows)[0]
    assert case.description == "## Precondition\nmust be logged in"
    assert "## Steps" not in case.description
    assert "*" not in case.description


def test_metadata_mapping():
    rows = [
        _row(
            1,
            key="55",
            summary="Search",
            folder="/Shop/Search",
            priority="Critical",
            labels=" ui , search ,, ",
            created_by="Jane Doe [jane@example.com]",
        )
    ]
    case = aggregate_cases(rows)[0]
    assert case.title == "Search"
    assert case.folder == "/Shop/Search"
    assert case.priority is Priority.HIGH
    assert case.tags == "ui,search"
    assert case.owner == "Jane Doe"
    assert case.labels == ""


def test_steps_header_added_once_and_expected_optional():
    rows = [
        _row(1, key="1", summary="A", step="first", expected="ok"),
        _row(2, step="second"),
        _row(3, step="third", expected="done"),
    ]
    case = aggregate_cases(rows)[0]
    assert case.description.count("## Steps") == 1
    assert case.description == (
        "## Steps\n* first\n  *Expected:* ok\n* second\n* third\n  *Expected:* done"
    )


def test_step_after_precondition_appends_to_end_of_buffer():
    rows = [
        _row(1, key="1", summary="A", step="first"),
        _row(2, step="Preconditions: cart is empty"),
        _row(3, step="second"),
    ]
    case = aggregate_cases(rows)[0]
    assert case.description == "## Steps\n* first\n## Precondition\ncart is empty\n* second"


def test_case_count_matches_summary_rows_and_last_case_is_flushed():
    rows = [
        _row(1, key="1", summary="A"),
        _row(2, step="a1"),
        _row(3, key="2", summary="B"),
        _row(4, key="3", summary="C", step="c1"),
        _row(5, step="c2", expected="c2 ok"),
    ]
    cases = aggregate_cases(rows)
    assert [c.id for c in cases] == ["TS1", "TS2", "TS3"]
    assert cases[1].description == ""
    assert cases[2].description.endswith("* c2\n  *Expected:* c2 ok")


def test_orphan_step_row_before_any_case():
    with pytest.raises(OrphanStepRowError) as e:
        aggregate_cases([_row(1, step="lost step"), _row(2, key="1", summary="A")])
    assert e.value.row == 1


def test_orphan_precondition_row():
    with pytest.raises(OrphanStepRowError):
        aggregate_cases([_row(1, step="Preconditions: x")])


def test_row_without_summary_or_step_is_ignored():
    cases = aggregate_cases([_row(1, key="1", summary="A"), _row(2, expected="dangling")])
    assert len(cases) == 1
    assert cases[0].sections == ()


def test_empty_entity_key_is_malformed():
    with pytest.raises(MalformedFieldError) as e:
        aggregate_cases([_row(3, key="", summary="A")])
    assert e.value.columns == ["Entity Key"]
    assert e.value.row == 3


def test_step_does_not_mutate_previous_state():
    start = AggregatorState()
    opened = step(start, _row(1, key="1", summary="A"))
    stepped = step(opened, _row(2, step="go"))
    assert start.current is None
    assert opened.current is not None and opened.current.sections == ()
    assert stepped.current.sections[0].lines == ("* go",)


def test_grouped_priority_overrides():
    cases = aggregate_cases([_row(1, key="1", summary="A", priority="Major")], {"Major": "high"})
    assert cases[0].priority is Priority.HIGH
