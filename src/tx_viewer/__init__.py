"""tx-viewer — blockchain transaction detail viewer backed by a provider proxy."""

__version__ = "0.1.0"
