"""Transaction record models."""

from tx_viewer.models.transaction import (
    TransactionEnvelope,
    TransactionRecord,
    decode_envelope,
)

__all__ = ["TransactionEnvelope", "TransactionRecord", "decode_envelope"]
