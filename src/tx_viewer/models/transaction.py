"""Typed transaction record decoded from the upstream provider envelope.

Upstream bodies look like::

    {"apiVersion": "2023-04-25", "requestId": "...", "data": {"item": {...}}}

The models are frozen and use camelCase aliases so the upstream JSON
validates directly.  Unknown upstream fields are ignored here; the proxy
relays the raw body untouched, so nothing is lost on the wire.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from tx_viewer.errors.provider_errors import MalformedResponseError


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Parties and fee
# ---------------------------------------------------------------------------


class Party(_UpstreamModel):
    """A sender or recipient with a decimal-as-string amount."""

    address: str
    amount: str


class Fee(_UpstreamModel):
    """Transaction fee in the blockchain's display unit."""

    amount: str
    unit: str = ""


# ---------------------------------------------------------------------------
# Inputs / outputs
# ---------------------------------------------------------------------------


class ScriptSig(_UpstreamModel):
    asm: str = ""
    hex: str = ""
    type: str = ""


class TransactionInput(_UpstreamModel):
    """A single ``vin`` entry."""

    addresses: tuple[str, ...] = ()
    script_sig: ScriptSig | None = None
    sequence: int | None = None
    txid: str = ""
    txinwitness: tuple[str, ...] = ()
    value: str = ""
    vout: int | None = None


class ScriptPubKey(_UpstreamModel):
    addresses: tuple[str, ...] = ()
    asm: str = ""
    hex: str = ""
    req_sigs: int | None = None
    type: str = ""


class TransactionOutput(_UpstreamModel):
    """A single ``vout`` entry."""

    is_spent: bool = False
    script_pub_key: ScriptPubKey
    value: str = ""


class BlockchainSpecific(_UpstreamModel):
    """Bitcoin-specific transaction fields."""

    locktime: int
    size: int
    v_size: int
    version: int
    vin: tuple[TransactionInput, ...] = ()
    vout: tuple[TransactionOutput, ...] = ()
    confirmations: int | None = None


# ---------------------------------------------------------------------------
# Record and envelope
# ---------------------------------------------------------------------------


class TransactionRecord(_UpstreamModel):
    """A transaction as returned by the provider.

    ``mined_in_block_*`` are absent for unconfirmed transactions.
    """

    transaction_id: str
    transaction_hash: str
    index: int | None = None
    is_confirmed: bool
    mined_in_block_hash: str | None = None
    mined_in_block_height: int | None = None
    senders: tuple[Party, ...]
    recipients: tuple[Party, ...]
    fee: Fee
    timestamp: int
    blockchain_specific: BlockchainSpecific


class TransactionData(_UpstreamModel):
    item: TransactionRecord


class TransactionEnvelope(_UpstreamModel):
    """Provider response wrapper around a single transaction."""

    api_version: str = ""
    request_id: str = ""
    data: TransactionData

    @property
    def record(self) -> TransactionRecord:
        """Shortcut to ``data.item``."""
        return self.data.item


def decode_envelope(payload: Any) -> TransactionEnvelope:
    """Decode a raw JSON payload into a :class:`TransactionEnvelope`.

    Raises:
        MalformedResponseError: If required fields are missing or mistyped.
    """
    try:
        return TransactionEnvelope.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        msg = f"malformed transaction response: {location}: {first['msg']}"
        raise MalformedResponseError(msg) from exc
