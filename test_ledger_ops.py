import pytest

from computations import compute_balances
from ledger_ops import (
    add_entry,
    add_participant,
    delete_entry,
    edit_entry,
    remove_participant,
    rename_participant,
)
from models import Entry, InvalidEntryError, Ledger, PaymentShare


@pytest.fixture
def ledger():
    lg = Ledger(participants=["Alice", "Bob", "Charlie"])
    add_entry(lg, "Dinner", 90, [{"name": "Alice", "amount": 90}], ["Alice", "Bob", "Charlie"])
    add_entry(lg, "Taxi", 30, [{"name": "Bob", "amount": 20}, {"name": "Charlie", "amount": 10}],
              ["Bob", "Charlie"])
    return lg


def test_add_participant_trims():
    lg = Ledger()
    assert add_participant(lg, "  Dana ") == "Dana"
    assert lg.participants == ["Dana"]


@pytest.mark.parametrize("name", ["", "   ", None])
def test_add_participant_requires_name(name):
    with pytest.raises(ValueError):
        add_participant(Ledger(), name)


def test_add_participant_rejects_duplicate(ledger):
    with pytest.raises(ValueError, match="already exists"):
        add_participant(ledger, "Bob")


def test_participant_names_are_case_sensitive(ledger):
    add_participant(ledger, "bob")
    assert ledger.participants == ["Alice", "Bob", "Charlie", "bob"]


def test_rename_participant_propagates(ledger):
    rename_participant(ledger, "Bob", " Robert ")
    assert ledger.participants == ["Alice", "Robert", "Charlie"]
    assert ledger.entries[0].split_among == ["Alice", "Robert", "Charlie"]
    assert [p.name for p in ledger.entries[1].payers] == ["Robert", "Charlie"]
    r = compute_balances(ledger.participants, ledger.entries)
    assert r.balances["Robert"] == pytest.approx(-25.0)


def test_rename_participant_errors(ledger):
    with pytest.raises(ValueError):
        rename_participant(ledger, "Zed", "Zoe")
    with pytest.raises(ValueError):
        rename_participant(ledger, "Bob", "Alice")
    with pytest.raises(ValueError):
        rename_participant(ledger, "Bob", " ")


def test_rename_to_same_name_is_noop(ledger):
    assert rename_participant(ledger, "Bob", "Bob") == "Bob"
    assert ledger.participants == ["Alice", "Bob", "Charlie"]


def test_remove_participant_adjusts_entries(ledger):
    removed = remove_participant(ledger, "Charlie")
    assert removed == []
    assert ledger.participants == ["Alice", "Bob"]

    dinner, taxi = ledger.entries
    assert dinner.split_among == ["Alice", "Bob"]
    assert dinner.amount == 90
    assert [p.name for p in taxi.payers] == ["Bob"]
    assert taxi.amount == 20
    assert taxi.split_among == ["Bob"]


def test_remove_participant_deletes_entries_only_they_paid(ledger):
    removed = remove_participant(ledger, "Alice")
    assert [e.description for e in removed] == ["Dinner"]
    assert [e.description for e in ledger.entries] == ["Taxi"]


def test_remove_last_split_member_falls_back_to_everyone():
    lg = Ledger(participants=["A", "B", "C"])
    add_entry(lg, "Gift", 30, [{"name": "A", "amount": 30}], ["C"])
    remove_participant(lg, "C")
    assert lg.entries[0].split_among == []
    r = compute_balances(lg.participants, lg.entries)
    assert r.balances == {"A": 15.0, "B": -15.0}


def test_remove_unknown_participant(ledger):
    with pytest.raises(ValueError):
        remove_participant(ledger, "Zed")


def test_add_entry_accepts_payment_shares(ledger):
    e = add_entry(ledger, " Snacks ", 12.5, [PaymentShare("Alice", 12.5)], ["Alice", "Bob"])
    assert e == Entry("Snacks", 12.5, [PaymentShare("Alice", 12.5)], ["Alice", "Bob"])
    assert ledger.entries[-1] is e


def test_add_entry_skips_empty_payer_amounts(ledger):
    e = add_entry(ledger, "Lunch", 40, [{"name": "Alice", "amount": 40}, {"name": "Bob", "amount": ""}],
                  ["Alice", "Bob"])
    assert e.payers == [PaymentShare("Alice", 40.0)]


def test_add_entry_allows_cent_tolerance(ledger):
    e = add_entry(ledger, "Split", 100, [{"name": "Alice", "amount": 33.33}, {"name": "Bob", "amount": 33.33},
                                         {"name": "Charlie", "amount": 33.33}], ["Alice"])
    assert e.payer_total == pytest.approx(99.99)


@pytest.mark.parametrize("description, amount, payers, split, message", [
    ("", 10, [{"name": "Alice", "amount": 10}], ["Alice"], "Description"),
    ("x", 0, [{"name": "Alice", "amount": 10}], ["Alice"], "positive"),
    ("x", "abc", [{"name": "Alice", "amount": 10}], ["Alice"], "positive"),
    ("x", 10, [], ["Alice"], "at least one payer"),
    ("x", 10, [{"name": "Alice", "amount": 8}], ["Alice"], "must equal the total"),
    ("x", 10, [{"name": "Alice", "amount": 10}], [], "split among"),
    ("x", 10, [{"name": "Zed", "amount": 10}], ["Alice"], "Unknown participant"),
    ("x", 10, [{"name": "Alice", "amount": 10}], ["Alice", "Zed"], "Zed"),
])
def test_add_entry_validation(ledger, description, amount, payers, split, message):
    with pytest.raises(InvalidEntryError, match=message):
        add_entry(ledger, description, amount, payers, split)
    assert len(ledger.entries) == 2


def test_edit_entry(ledger):
    edit_entry(ledger, 0, "Dinner", 60, [{"name": "Bob", "amount": 60}], ["Alice", "Bob"])
    assert ledger.entries[0].payers == [PaymentShare("Bob", 60.0)]
    r = compute_balances(ledger.participants, ledger.entries)
    assert r.balances == {"Alice": -30.0, "Bob": 35.0, "Charlie": -5.0}


def test_edit_entry_keeps_old_entry_on_error(ledger):
    before = ledger.entries[0]
    with pytest.raises(InvalidEntryError):
        edit_entry(ledger, 0, "Dinner", 60, [{"name": "Bob", "amount": 50}], ["Alice"])
    assert ledger.entries[0] is before
    with pytest.raises(IndexError):
        edit_entry(ledger, 5, "Dinner", 60, [{"name": "Bob", "amount": 60}], ["Alice"])


def test_delete_entry(ledger):
    e = delete_entry(ledger, 1)
    assert e.description == "Taxi"
    assert len(ledger.entries) == 1
    with pytest.raises(IndexError):
        delete_entry(ledger, 3)


@pytest.mark.parametrize("amount, payers", [
    ("nan", [{"name": "Alice", "amount": 10}]),
    ("inf", [{"name": "Alice", "amount": "inf"}]),
    (float("-inf"), [{"name": "Alice", "amount": 10}]),
    (10, [{"name": "Alice", "amount": "nan"}]),
    (10, [PaymentShare("Alice", float("inf"))]),
])
def test_add_entry_rejects_non_finite_amounts(ledger, amount, payers):
    with pytest.raises(InvalidEntryError):
        add_entry(ledger, "Broken", amount, payers, ["Alice", "Bob"])
    assert len(ledger.entries) == 2
    r = compute_balances(ledger.participants, ledger.entries)
    assert r.balances == {"Alice": 60.0, "Bob": -25.0, "Charlie": -35.0}
