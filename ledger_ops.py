"""
Participant and entry editing for a ShareMoney ledger
"""
from __future__ import annotations
import math
from typing import Iterable, List, Mapping, Sequence, Union

from models import Entry, InvalidEntryError, Ledger, PaymentShare, parse_amount
from computations import payer_total_status
from utils import safe_float

# allowed gap between the payer total and the entry amount
PAYER_TOLERANCE = 0.01

PayerInput = Union[PaymentShare, Mapping]


# ---------- Participants ----------
def add_participant(ledger: Ledger, name: str) -> str:
    """Add a participant; returns the trimmed name"""
    name = (name or "").strip()
    if not name:
        raise ValueError("Participant name is required.")
    if name in ledger.participants:
        raise ValueError(f"Participant {name!r} already exists.")
    ledger.participants.append(name)
    return name


def rename_participant(ledger: Ledger, old: str, new: str) -> str:
    """Rename a participant everywhere it is referenced; returns the new name"""
    if old not in ledger.participants:
        raise ValueError(f"Unknown participant {old!r}.")
    new = (new or "").strip()
    if not new:
        raise ValueError("Participant name is required.")
    if new == old:
        return old
    if new in ledger.participants:
        raise ValueError(f"Participant {new!r} already exists.")

    ledger.participants[ledger.participants.index(old)] = new
    for e in ledger.entries:
        for p in e.payers:
            if p.name == old:
                p.name = new
        e.split_among = [new if n == old else n for n in e.split_among]
    return new


def remove_participant(ledger: Ledger, name: str) -> List[Entry]:
    """
    Remove a participant and their part in every entry.
    Their payer shares are dropped and the entry amount shrinks to what the
    other payers paid; entries nobody else paid for are deleted and returned.
    """
    if name not in ledger.participants:
        raise ValueError(f"Unknown participant {name!r}.")
    ledger.participants.remove(name)

    removed = []
    for i in range(len(ledger.entries) - 1, -1, -1):
        e = ledger.entries[i]
        if any(p.name == name for p in e.payers):
            e.payers = [p for p in e.payers if p.name != name]
            if not e.payers:
                removed.append(ledger.entries.pop(i))
                continue
            e.amount = e.payer_total
        e.split_among = [n for n in e.split_among if n != name]
    removed.reverse()
    return removed


# ---------- Entries ----------
def _payer_shares(payers: Iterable[PayerInput]) -> List[PaymentShare]:
    out = []
    for p in payers:
        if isinstance(p, PaymentShare):
            out.append(PaymentShare(p.name, parse_amount(p.amount, f"Amount paid by {p.name}")))
        elif p.get("amount") in (None, ""):
            continue
        else:
            name = str(p["name"])
            out.append(PaymentShare(name, parse_amount(p.get("amount"), f"Amount paid by {name}")))
    # unticked payers (no amount or zero) don't count
    return [p for p in out if p.amount > 0]


def build_entry(
    ledger: Ledger,
    description: str,
    amount: float,
    payers: Iterable[PayerInput],
    split_among: Sequence[str],
) -> Entry:
    """Validate user input against the ledger and build an Entry"""
    description = (description or "").strip()
    if not description:
        raise InvalidEntryError("Description is required.")
    amount = safe_float(amount, None)
    if amount is None or not math.isfinite(amount) or amount <= 0:
        raise InvalidEntryError("Amount must be a positive number.")

    shares = _payer_shares(payers)
    if not shares:
        raise InvalidEntryError("Please select at least one payer and enter their amount.")
    total, diff = payer_total_status(amount, shares)
    if abs(diff) > PAYER_TOLERANCE:
        raise InvalidEntryError(f"Payer amounts ({total:.2f}) must equal the total ({amount:.2f}).")

    split = list(dict.fromkeys(split_among))
    if not split:
        raise InvalidEntryError("Please select at least one person to split among.")

    unknown = [n for n in [p.name for p in shares] + split if n not in ledger.participants]
    if unknown:
        raise InvalidEntryError(f"Unknown participant(s): {', '.join(dict.fromkeys(unknown))}")

    return Entry(description=description, amount=amount, payers=shares, split_among=split)


def add_entry(ledger: Ledger, description: str, amount: float,
              payers: Iterable[PayerInput], split_among: Sequence[str]) -> Entry:
    """Validate and append a new entry"""
    e = build_entry(ledger, description, amount, payers, split_among)
    ledger.entries.append(e)
    return e


def edit_entry(ledger: Ledger, index: int, description: str, amount: float,
               payers: Iterable[PayerInput], split_among: Sequence[str]) -> Entry:
    """Validate and replace the entry at index"""
    if not 0 <= index < len(ledger.entries):
        raise IndexError(f"No entry at position {index}")
    e = build_entry(ledger, description, amount, payers, split_among)
    ledger.entries[index] = e
    return e


def delete_entry(ledger: Ledger, index: int) -> Entry:
    if not 0 <= index < len(ledger.entries):
        raise IndexError(f"No entry at position {index}")
    return ledger.entries.pop(index)
