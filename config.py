"""
Configuration and ledger snapshot loading for ShareMoney
"""
from __future__ import annotations
import json
import logging
import os
from dataclasses import asdict
from typing import Dict, Optional

from models import Entry, Ledger
from utils import app_dir

logger = logging.getLogger(__name__)

# currency code -> display symbol; amounts are never converted
CURRENCIES: Dict[str, str] = {
    "LKR": "₨.",
    "USD": "$",
    "EUR": "€",
}
DEFAULT_CURRENCY = "LKR"


def currency_symbol(code: str) -> str:
    """Display symbol for a currency code"""
    try:
        return CURRENCIES[code.upper()]
    except KeyError:
        raise ValueError(f"Unknown currency {code!r}; choose one of {', '.join(CURRENCIES)}") from None


def settings_path() -> str:
    return os.path.join(app_dir(), "settings.json")


def load_settings(path: Optional[str] = None) -> dict:
    """Load settings JSON (currently just the default currency)"""
    settings = {"currency": DEFAULT_CURRENCY}
    path = path or settings_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return settings
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return settings

    code = str(data.get("currency", DEFAULT_CURRENCY)).upper()
    if code in CURRENCIES:
        settings["currency"] = code
    else:
        logger.warning("Ignoring unknown currency %r in %s", code, path)
    return settings


def ledger_to_dict(ledger: Ledger) -> dict:
    """Convert Ledger object to dictionary for JSON serialization"""
    return {
        "version": ledger.version,
        "currency": ledger.currency,
        "participants": list(ledger.participants),
        "entries": [asdict(e) for e in ledger.entries],
    }


def dict_to_ledger(d: dict, default_currency: str = DEFAULT_CURRENCY) -> Ledger:
    """Convert dictionary from JSON to Ledger object"""
    # names are identities: trim and keep the first occurrence
    people = [str(p).strip() for p in d.get("participants", [])]
    people = list(dict.fromkeys(p for p in people if p))
    return Ledger(
        version=d.get("version", 1),
        currency=str(d.get("currency") or default_currency).upper(),
        participants=people,
        entries=[Entry.from_dict(e) for e in d.get("entries", [])],
    )


def load_ledger(path: str, default_currency: str = DEFAULT_CURRENCY) -> Ledger:
    """Read a ledger snapshot from a JSON file"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object with 'participants' and 'entries'")
    return dict_to_ledger(data, default_currency)
