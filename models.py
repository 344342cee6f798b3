"""
Data models for ShareMoney
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Union

from utils import safe_float


class InvalidEntryError(ValueError):
    """Raised when an expense entry is malformed or fails validation"""


def parse_amount(value, what: str = "Amount") -> float:
    """Convert value to a finite float, raising InvalidEntryError otherwise (nan, inf, junk)"""
    amount = safe_float(value, None)
    if amount is None or not math.isfinite(amount):
        raise InvalidEntryError(f"{what} is not a number: {value!r}")
    return amount


@dataclass
class PaymentShare:
    """One payer's contribution to an entry"""
    name: str
    amount: float


@dataclass
class Entry:
    """Single recorded expense: who paid, how much, and who shares the cost"""
    description: str
    amount: float
    payers: List[PaymentShare]
    split_among: List[str] = field(default_factory=list)  # empty -> everyone

    @property
    def payer_total(self) -> float:
        return sum(p.amount for p in self.payers)

    def references(self, name: str) -> bool:
        """True if name pays for or shares this entry"""
        return name in self.split_among or any(p.name == name for p in self.payers)

    @classmethod
    def from_dict(cls, d: Mapping) -> "Entry":
        """
        Build an entry from a mapping.
        Accepts the current shape {"payers": [{"name", "amount"}], ...} and the
        legacy single-payer shape {"payer": name, "amount": ...}, which becomes
        one payer for the full amount. "splitAmong" is accepted as an alias.
        """
        if not isinstance(d, Mapping):
            raise InvalidEntryError(f"Entry must be an object, got {d!r}")
        amount = parse_amount(d.get("amount"), "Entry amount")

        if d.get("payers") is not None:
            if not isinstance(d["payers"], list):
                raise InvalidEntryError(f"Entry payers must be a list, got {d['payers']!r}")
            payers = []
            for p in d["payers"]:
                if not isinstance(p, Mapping) or p.get("name") is None:
                    raise InvalidEntryError(f"Payer needs a name and an amount, got {p!r}")
                payers.append(PaymentShare(str(p["name"]), parse_amount(p.get("amount"), "Payer amount")))
        elif d.get("payer") is not None:
            payers = [PaymentShare(str(d["payer"]), amount)]
        else:
            raise InvalidEntryError("Entry has neither 'payers' nor 'payer'")

        split = d.get("split_among")
        if split is None:
            split = d.get("splitAmong")
        if split is not None and not isinstance(split, list):
            raise InvalidEntryError(f"Split set must be a list of names, got {split!r}")
        return cls(
            description=str(d.get("description", "")),
            amount=amount,
            payers=payers,
            split_among=[str(n) for n in (split or [])],
        )


EntryLike = Union[Entry, Mapping]


def normalize_entry(e: EntryLike) -> Entry:
    """Return e as an Entry, converting mappings (legacy or current shape)"""
    if isinstance(e, Entry):
        return e
    return Entry.from_dict(e)


@dataclass(frozen=True)
class Transaction:
    """Suggested transfer: sender (debtor) pays receiver (creditor)"""
    sender: str
    receiver: str
    amount: float

    def as_dict(self) -> Dict[str, object]:
        return {"from": self.sender, "to": self.receiver, "amount": self.amount}


@dataclass
class BalanceReport:
    """Output of the balance engine"""
    paid: Dict[str, float]
    owed: Dict[str, float]
    balances: Dict[str, float]  # positive -> is owed; negative -> owes
    total_spent: float = 0.0


@dataclass
class Ledger:
    """Participants and entries of one shared-expense group"""
    participants: List[str] = field(default_factory=list)
    entries: List[Entry] = field(default_factory=list)
    currency: str = "LKR"  # display label only
    version: int = 1
