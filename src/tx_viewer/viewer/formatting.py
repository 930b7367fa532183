"""Display formatting for a loaded transaction.

Everything here is derived from the record on each render and never stored
back on it: the date string, summed totals and fee per byte.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tx_viewer.models.transaction import Party, TransactionRecord

NOT_AVAILABLE = "N/A"
DEFAULT_UNIT = "BTC"

_DATE_FORMAT = "%d/%m/%Y - %H:%M:%S"


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def resolve_timezone(name: str) -> tzinfo | None:
    """Map a configured zone name to a tzinfo; empty means local time."""
    if not name:
        return None
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def timestamp_to_date(timestamp: int | None, tz: tzinfo | None = None) -> str:
    """Format seconds since the epoch as ``DD/MM/YYYY - HH:MM:SS``.

    Returns an empty string for a missing or zero timestamp, and for one
    whose year falls outside what ``datetime`` can represent.
    """
    if not timestamp:
        return ""
    try:
        moment = datetime.fromtimestamp(timestamp, tz=tz)
    except (ValueError, OverflowError, OSError):
        return ""
    return moment.strftime(_DATE_FORMAT)


def format_amount(value: float) -> str:
    """Render a float the way a browser prints a number (``3``, ``0.0015``)."""
    if math.isnan(value):
        return "NaN"
    if value == 0:
        return "0"
    digits = Decimal(repr(value))
    if 1e-6 <= abs(value) < 1e21:
        text = format(digits, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    return format(digits.normalize(), "e")


def _to_float(amount: str) -> float:
    try:
        return float(amount)
    except ValueError:
        return math.nan


def _sum_amounts(parties: Iterable[Party]) -> float:
    return sum((_to_float(p.amount) for p in parties), 0.0)


def total_input(record: TransactionRecord) -> float:
    """Sum of recipient amounts, shown under the "Total Input" label."""
    return _sum_amounts(record.recipients)


def total_output(record: TransactionRecord) -> float:
    """Sum of sender amounts, shown under the "Total Output" label."""
    return _sum_amounts(record.senders)


def value_when_transacted(record: TransactionRecord) -> float:
    return _sum_amounts(record.recipients)


def fee_per_byte(record: TransactionRecord | None) -> str:
    """Fee divided by transaction size, to 20 decimal places.

    ``"N/A"`` when no record is loaded or the size is zero.
    """
    if record is None:
        return NOT_AVAILABLE
    size = record.blockchain_specific.size
    if not size:
        return NOT_AVAILABLE
    return f"{_to_float(record.fee.amount) / size:.20f}"


def confirmations_label(record: TransactionRecord) -> str:
    confirmations = record.blockchain_specific.confirmations
    if confirmations is None:
        return NOT_AVAILABLE
    return f"{confirmations} Confirmed"


def _block_height(record: TransactionRecord) -> str:
    height = record.mined_in_block_height
    return NOT_AVAILABLE if height is None else str(height)


def _unit(record: TransactionRecord) -> str:
    return record.fee.unit or DEFAULT_UNIT


def _first(parties: tuple[Party, ...], attr: str) -> str:
    return getattr(parties[0], attr) if parties else NOT_AVAILABLE


# ---------------------------------------------------------------------------
# Panels and tables
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScriptRow:
    """One row of the inputs or outputs table."""

    index: int
    addresses: str
    asm: str
    hex: str


def summary_rows(record: TransactionRecord, tz: tzinfo | None = None) -> list[tuple[str, str]]:
    """Label/value pairs for the summary panel."""
    unit = _unit(record)
    return [
        ("Transaction ID", record.transaction_id),
        ("Sender", _first(record.senders, "address")),
        ("Recipient", _first(record.recipients, "address")),
        ("Amount", _first(record.recipients, "amount")),
        ("Transaction Hash", record.transaction_hash),
        ("Included in block", _block_height(record)),
        ("Fee", f"{record.fee.amount} {unit}"),
        ("Confirmations", confirmations_label(record)),
        ("Size", f"{record.blockchain_specific.size} bytes"),
        ("Date/Time", timestamp_to_date(record.timestamp, tz)),
    ]


def detail_rows(record: TransactionRecord, tz: tzinfo | None = None) -> list[tuple[str, str]]:
    """Label/value pairs for the details table."""
    unit = _unit(record)
    return [
        ("Status", "Confirmed" if record.is_confirmed else "Unconfirmed"),
        ("Size in Bytes", str(record.blockchain_specific.size)),
        ("Date/Time", timestamp_to_date(record.timestamp, tz)),
        ("Included in block", _block_height(record)),
        ("Confirmations", confirmations_label(record)),
        ("Total Input", f"{format_amount(total_input(record))} {unit}"),
        ("Total Output", f"{format_amount(total_output(record))} {unit}"),
        ("Fees", f"{record.fee.amount} {unit}"),
        ("Fee per byte", f"{fee_per_byte(record)} {unit}"),
        ("Value when transacted", f"{format_amount(value_when_transacted(record))} {unit}"),
    ]


def input_rows(record: TransactionRecord) -> list[ScriptRow]:
    rows = []
    for index, vin in enumerate(record.blockchain_specific.vin):
        script = vin.script_sig
        rows.append(
            ScriptRow(
                index=index,
                addresses=", ".join(vin.addresses),
                asm=(script.asm if script else "") or NOT_AVAILABLE,
                hex=(script.hex if script else "") or NOT_AVAILABLE,
            )
        )
    return rows


def output_rows(record: TransactionRecord) -> list[ScriptRow]:
    return [
        ScriptRow(
            index=index,
            addresses=", ".join(vout.script_pub_key.addresses),
            asm=vout.script_pub_key.asm or NOT_AVAILABLE,
            hex=vout.script_pub_key.hex or NOT_AVAILABLE,
        )
        for index, vout in enumerate(record.blockchain_specific.vout)
    ]
