"""
Business logic and computations for ShareMoney
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from models import BalanceReport, EntryLike, PaymentShare, Transaction, normalize_entry
from utils import round2

logger = logging.getLogger(__name__)

# balances and remainders within +/- DUST count as zero
DUST = 0.01
# residuals outside (MIN_RESIDUAL, MAX_RESIDUAL) are not corrected
MIN_RESIDUAL = 0.001
MAX_RESIDUAL = 1.0


def resolve_split(split_among: Sequence[str], participants: List[str]) -> List[str]:
    """Split set of an entry; an empty one means everyone currently in the group"""
    return list(split_among) if split_among else list(participants)


def compute_balances(participants: Iterable[str], entries: Iterable[EntryLike]) -> BalanceReport:
    """
    Compute paid/owed totals and net balances for each participant.

    Names in payers or split sets that are not participants are ignored.
    Balances are rounded to cents; a small rounding residual (between 0.001
    and 1) is taken off the largest balance so that the balances sum to zero.
    Larger residuals come from entries whose payer total does not match the
    amount and are left as they are.
    """
    people = list(dict.fromkeys(participants))
    paid = {p: 0.0 for p in people}
    owed = {p: 0.0 for p in people}
    total_spent = 0.0

    if not people:
        return BalanceReport(paid=paid, owed=owed, balances={}, total_spent=0.0)

    for e in map(normalize_entry, entries):
        # never empty here: people is non-empty
        split = resolve_split(e.split_among, people)
        per_person = e.amount / len(split)

        for share in e.payers:
            if share.name in paid:
                paid[share.name] += share.amount
        total_spent += e.amount

        for name in split:
            if name in owed:
                owed[name] += per_person

    balances = {p: round2(paid[p] - owed[p]) for p in people}
    _correct_rounding(balances)

    return BalanceReport(paid=paid, owed=owed, balances=balances, total_spent=total_spent)


def _correct_rounding(balances: Dict[str, float]) -> None:
    """Absorb a small rounding residual into the largest absolute balance (in place)"""
    residual = round2(sum(balances.values()))
    if abs(residual) >= MAX_RESIDUAL:
        logger.warning("Balances are off by %.2f; payer totals probably do not match entry amounts", residual)
        return
    if abs(residual) <= MIN_RESIDUAL:
        return

    target = None
    largest = 0.0
    for name, bal in balances.items():
        if abs(bal) > largest:
            largest = abs(bal)
            target = name
    if target is not None:
        logger.debug("Moving rounding residual %.2f onto %s", residual, target)
        balances[target] = round2(balances[target] - residual)


def plan_settlement(balances: Mapping[str, float]) -> List[Transaction]:
    """
    Greedy settlement: debtors pay creditors, both taken in balances order.
    net>0 creditor; net<0 debtor; anything within DUST is already settled.

    This keeps the number of transfers small but does not search for the
    minimum (no subset matching).
    """
    creditors = [[p, v] for p, v in balances.items() if v > DUST]
    debtors = [[p, -v] for p, v in balances.items() if v < -DUST]

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        x = min(debtor[1], creditor[1])
        transfers.append(Transaction(debtor[0], creditor[0], round2(x)))
        debtor[1] -= x
        creditor[1] -= x
        if debtor[1] < DUST:
            i += 1
        if creditor[1] < DUST:
            j += 1

    logger.debug("Planned %d transfers for %d debtors and %d creditors",
                 len(transfers), len(debtors), len(creditors))
    return transfers


def balance_status(balance: float) -> str:
    if balance > DUST:
        return "is owed"
    if balance < -DUST:
        return "owes"
    return "is settled up"


def summarize(report: BalanceReport, transactions: Optional[List[Transaction]] = None) -> dict:
    """
    Summary of a balance report.
    Returns dict {total_spent, average_share, people: {name: {paid, owed, balance, status}}, settled}
    """
    if transactions is None:
        transactions = plan_settlement(report.balances)
    n = len(report.balances)
    return {
        "total_spent": round2(report.total_spent),
        "average_share": round2(report.total_spent / n) if n else 0.0,
        "people": {
            p: {
                "paid": round2(report.paid[p]),
                "owed": round2(report.owed[p]),
                "balance": bal,
                "status": balance_status(bal),
            } for p, bal in report.balances.items()
        },
        "settled": not transactions,
    }


def split_payment_equally(total: float, payers: Sequence[str]) -> Dict[str, float]:
    """Divide total among payers in cents; the last payer takes the remainder"""
    if total <= 0:
        raise ValueError("Enter the total amount first.")
    if not payers:
        raise ValueError("Check at least one payer first.")
    each = round2(total / len(payers))
    remainder = round2(total - each * len(payers))
    out = {p: each for p in payers}
    out[payers[-1]] = round2(each + remainder)
    return out


def payer_total_status(amount: float, payers: Iterable[PaymentShare]) -> Tuple[float, float]:
    """
    Return (payer_total, difference) where difference = amount - payer_total
    rounded to cents: positive -> still to be covered, negative -> overpaid.
    """
    total = sum(p.amount for p in payers)
    return total, round2(amount - total)
