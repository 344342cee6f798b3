"""
ShareMoney
- Load a ledger snapshot (participants + shared expenses) from JSON.
- Print everyone's net balance and the transfers that settle all debts.
- Optionally export an Excel report: entries, summary with chart, transfers.

Run:
  python share_money.py ledger.json [--currency USD] [--excel report.xlsx]

Dependencies:
  pip install openpyxl
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional

from config import currency_symbol, load_ledger, load_settings
from computations import compute_balances, plan_settlement, summarize
from excel_export import export_excel
from models import Ledger
from utils import format_money


def render_report(ledger: Ledger) -> List[str]:
    """Text lines describing balances and settlement for a ledger"""
    symbol = currency_symbol(ledger.currency)
    report = compute_balances(ledger.participants, ledger.entries)
    transfers = plan_settlement(report.balances)
    summary = summarize(report, transfers)

    lines = []
    if transfers:
        for t in transfers:
            lines.append(f"{t.sender} needs to pay {t.receiver}: {format_money(t.amount, symbol)}")
    else:
        lines.append("Everyone is settled up!")
    lines.append("")
    lines.append(f"Total spent: {format_money(summary['total_spent'], symbol)}")
    lines.append(f"Average share: {format_money(summary['average_share'], symbol)}")
    for name, s in summary["people"].items():
        if s["status"] == "is settled up":
            lines.append(f"  {name} is settled up")
        else:
            lines.append(f"  {name} {s['status']} {format_money(abs(s['balance']), symbol)}")
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="share-money", description="Settle shared expenses.")
    parser.add_argument("ledger", help="ledger snapshot (JSON)")
    parser.add_argument("--currency", help="display currency code (LKR, USD, EUR)")
    parser.add_argument("--excel", metavar="PATH", help="also write an Excel report to PATH")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
        ledger = load_ledger(args.ledger, settings["currency"])
        if args.currency:
            currency_symbol(args.currency)
            ledger.currency = args.currency.upper()
        for line in render_report(ledger):
            print(line)
        if args.excel:
            export_excel(ledger, args.excel)
            print(f"\nExported: {args.excel}")
    except (OSError, json.JSONDecodeError, ValueError) as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
