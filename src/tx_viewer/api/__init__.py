"""HTTP API — proxy endpoint, viewer page and app factory."""
