import pytest
from builders import block, employee

from modules.personnel.rejoin import (
    can_rejoin,
    current_status,
    describe_status,
    is_rejoinable_status,
    is_terminal_status,
)
from modules.personnel.vocabulary import StatusVocabulary


def test_status_vocabulary_helpers():
    assert is_terminal_status(" retired ")
    assert is_terminal_status("DECEASED")
    assert not is_terminal_status("")
    assert is_rejoinable_status("osd")
    assert not is_rejoinable_status("In-Service")
    assert not is_rejoinable_status(None)


def test_terminal_block_status_overrides_top_level():
    emp = employee(block(status="Retired", is_currently_working=True), status="Suspended")
    assert can_rejoin(emp) is False


@pytest.mark.parametrize("status", ["Resigned", "Terminated", "OSD", "Suspended", "Deputation", "Absent", "Remove"])
def test_rejoinable_block_status(status):
    emp = employee(block(status=status), status="Active")
    assert can_rejoin(emp) is True


def test_rejoinable_block_status_is_case_insensitive():
    emp = employee(block(status="  suspended "), status="")
    assert can_rejoin(emp) is True


def test_no_history_and_no_status():
    assert can_rejoin(employee(status="")) is False
    assert can_rejoin(employee()) is False
    assert can_rejoin(None) is False


@pytest.mark.parametrize("top", ["Active", "retired", "Inactive", "Deceased", "whatever"])
def test_top_level_fallback_never_allows_rejoin(top):
    emp = employee(block(status="In-Service"), status=top)
    assert can_rejoin(emp) is False


def test_top_level_suspended_without_rejoinable_block_is_false():
    # the "suspended" fallback branch can only fire when the block status is
    # already rejoinable, which returns earlier; kept as a no-op pending confirmation
    assert can_rejoin(employee(status="Suspended")) is False
    assert can_rejoin(employee(block(status="In-Service"), status="suspended")) is False


def test_classifier_uses_resolved_current_block():
    emp = employee(
        block(from_date="2010-01-01", status_date="2012-01-01", status="Resigned"),
        block(from_date="2013-01-01", status_date="2020-01-01", status="Retired"),
        status="Resigned",
    )
    assert can_rejoin(emp) is False

    flagged = employee(
        block(from_date="2010-01-01", status="Resigned", is_currently_working=True),
        block(from_date="2013-01-01", status_date="2020-01-01", status="Retired"),
    )
    assert can_rejoin(flagged) is True


def test_vocabulary_can_be_injected():
    vocab = StatusVocabulary(
        status_options=["Active", "Retired", "Sabbatical"],
        in_service=["Active"],
        terminal=["Retired"],
        rejoinable=["Sabbatical"],
    )
    emp = employee(block(status="Sabbatical"))
    assert can_rejoin(emp, vocab) is True
    assert can_rejoin(employee(block(status="Resigned")), vocab) is False


def test_current_status_fallbacks():
    assert current_status(employee(block(status="OSD"), status="Active")) == "OSD"
    assert current_status(employee(block(status=""), status="Active")) == "Active"
    assert current_status(employee()) == "In-Service"


def test_describe_status(population, now):
    badge = describe_status(population[1], now=now)
    assert badge.status == "Suspended"
    assert badge.status_date == "2023-02-01"
    assert badge.can_rejoin is True
    assert badge.is_terminal is False
    assert badge.is_on_leave is False

    badge = describe_status(population[0], now=now)
    assert badge.is_active is True
    assert badge.is_on_leave is True
    assert badge.can_rejoin is False


def test_describe_status_canonical_spelling(now):
    badge = describe_status(employee(block(status=" osd ")), now=now)
    assert badge.status == "OSD"
