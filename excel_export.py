"""
Excel export functionality for ShareMoney
"""
from __future__ import annotations

from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Ledger
from config import currency_symbol
from computations import compute_balances, plan_settlement, resolve_split, summarize

MONEY_FORMAT = "0.00"

_EDGE = Side(style="thin", color="A0A0A0")
HEADER_STYLE = {
    "font": Font(bold=True, color="FFFFFF"),
    "fill": PatternFill("solid", fgColor="2176AE"),
    "alignment": Alignment(horizontal="center", vertical="center"),
    "border": Border(left=_EDGE, right=_EDGE, top=_EDGE, bottom=_EDGE),
}


def _new_sheet(wb, title, headers):
    """Create a sheet with a styled, frozen header row"""
    ws = wb.create_sheet(title)
    ws.append(headers)
    for cell in ws[1]:
        for attr, style in HEADER_STYLE.items():
            setattr(cell, attr, style)
    ws.freeze_panes = "A2"
    return ws


def _fit_columns(ws, narrowest=10, widest=45):
    """Widen each column to its longest value, within [narrowest, widest]"""
    for idx, values in enumerate(ws.iter_cols(values_only=True), start=1):
        longest = max((len(str(v)) for v in values if v is not None), default=0)
        ws.column_dimensions[get_column_letter(idx)].width = min(widest, max(narrowest, longest + 2))


def _money_columns(ws, cols, first_row=2):
    for r in range(first_row, ws.max_row + 1):
        for c in cols:
            ws.cell(r, c).number_format = MONEY_FORMAT


def export_excel(ledger: Ledger, filepath: str) -> None:
    """
    Export ledger to Excel file with sheets:
    - Entries
    - Summary (with net balance chart)
    - Transfers
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)

    people = ledger.participants
    symbol = currency_symbol(ledger.currency)
    report = compute_balances(people, ledger.entries)
    transfers = plan_settlement(report.balances)
    summary = summarize(report, transfers)

    # Entries sheet
    ws = _new_sheet(wb, "Entries", ["Description", f"Amount ({symbol})", "Paid by", "Split among"])
    for e in ledger.entries:
        if len(e.payers) == 1:
            paid_by = e.payers[0].name
        else:
            paid_by = ", ".join(f"{p.name}: {p.amount:.2f}" for p in e.payers)
        split = resolve_split(e.split_among, people)
        everyone = bool(people) and set(split) == set(people)
        ws.append([e.description, e.amount, paid_by, "everyone" if everyone else ", ".join(split)])
    _money_columns(ws, [2])
    _fit_columns(ws)

    # Summary sheet
    ws = _new_sheet(wb, "Summary", ["Person", "Paid", "Owed", "Net Balance", "Status"])
    for p, s in summary["people"].items():
        ws.append([p, s["paid"], s["owed"], s["balance"], s["status"]])
    last_person_row = ws.max_row
    ws.append([])
    ws.append(["Total spent", summary["total_spent"]])
    ws.cell(ws.max_row, 1).font = Font(bold=True)
    ws.append(["Average share", summary["average_share"]])
    ws.cell(ws.max_row, 1).font = Font(bold=True)
    _money_columns(ws, [2, 3, 4])
    _fit_columns(ws)

    if last_person_row >= 2:
        chart = BarChart()
        chart.type = "col"
        chart.title = f"Net Balance ({symbol})"
        chart.y_axis.title = f"Net Balance ({symbol})"
        chart.legend = None
        data = Reference(ws, min_col=4, min_row=1, max_row=last_person_row)
        cats = Reference(ws, min_col=1, min_row=2, max_row=last_person_row)
        chart.add_data(data, titles_from_data=True)
        chart.set_categories(cats)
        ws.add_chart(chart, "G2")

    # Transfers sheet
    ws = _new_sheet(wb, "Transfers", ["From (Debtor)", "To (Creditor)", f"Amount ({symbol})"])
    if transfers:
        for t in transfers:
            ws.append([t.sender, t.receiver, t.amount])
    else:
        ws.append(["Everyone is settled up!"])
    _money_columns(ws, [3])
    _fit_columns(ws)

    wb.save(filepath)
