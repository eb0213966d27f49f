from datetime import date

from workplan.ledger import ResourceLedger


def test_unused_resource_has_no_end_date():
    ledger = ResourceLedger()
    assert ledger.earliest_available("dev") is None
    assert "dev" not in ledger
    assert len(ledger) == 0


def test_commit_overwrites_previous_end():
    ledger = ResourceLedger()
    ledger.commit("dev", date(2024, 8, 13))
    ledger.commit("dev", date(2024, 8, 21))
    ledger.commit("qa", date(2024, 8, 2))

    assert ledger.earliest_available("dev") == date(2024, 8, 21)
    assert ledger.earliest_available("qa") == date(2024, 8, 2)
    assert len(ledger) == 2
