"""HTTP middleware setup helpers."""
