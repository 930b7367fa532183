#!/usr/bin/env python3
"""Transaction lookup tool — print a transaction fetched through the proxy.

    # Look up a transaction on the proxy configured in TXVIEWER_VIEWER__PROXY_URL
    # (defaults to the local server on TXVIEWER_SERVER__PORT)
    python -m tx_viewer.tools.lookup_tool <transaction_id>

    # Look up against an explicit proxy
    python -m tx_viewer.tools.lookup_tool <transaction_id> http://localhost:5000
"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

from tx_viewer.config.settings import AppConfig
from tx_viewer.viewer.client import ProxyClient
from tx_viewer.viewer.controller import TransactionViewer
from tx_viewer.viewer.formatting import (
    detail_rows,
    input_rows,
    output_rows,
    resolve_timezone,
    summary_rows,
)
from tx_viewer.viewer.state import Error, Success

if TYPE_CHECKING:
    from datetime import tzinfo

    from tx_viewer.viewer.formatting import ScriptRow
    from tx_viewer.viewer.state import State


def _pair_lines(rows: list[tuple[str, str]]) -> list[str]:
    width = max(len(label) for label, _ in rows)
    return [f"  {label + ':':<{width + 1}}  {value}" for label, value in rows]


def _script_lines(title: str, rows: list[ScriptRow]) -> list[str]:
    lines = [f"{title}:", "-" * 80]
    if not rows:
        lines.append("  (none)")
    for row in rows:
        lines.append(f"  [{row.index}] {row.addresses}")
        lines.append(f"      ASM: {row.asm}")
        lines.append(f"      HEX: {row.hex}")
    return lines


def render_text(state: State, tz: tzinfo | None = None) -> str:
    """Render *state* as plain text (what the page shows, minus markup)."""
    if isinstance(state, Error):
        return state.message
    if not isinstance(state, Success):
        return ""

    record = state.record
    lines = ["=" * 80, "TRANSACTION DETAILS", "=" * 80]
    lines += _pair_lines(summary_rows(record, tz))
    lines += ["", "Details:", "-" * 80]
    lines += _pair_lines(detail_rows(record, tz))
    lines.append("")
    lines += _script_lines("Inputs", input_rows(record))
    lines.append("")
    lines += _script_lines("Outputs", output_rows(record))
    return "\n".join(lines)


async def lookup(transaction_id: str, proxy_url: str, config: AppConfig) -> State:
    """Run one lookup against *proxy_url* and return the settled state."""
    client = ProxyClient(proxy_url, timeout=config.viewer.timeout)
    await client.connect()
    try:
        viewer = TransactionViewer(client)
        return await viewer.lookup(transaction_id)
    finally:
        await client.close()


def main() -> None:
    """CLI entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    config = AppConfig()
    transaction_id = sys.argv[1]
    proxy_url = (
        sys.argv[2]
        if len(sys.argv) > 2
        else config.viewer.proxy_url or f"http://localhost:{config.server.port}"
    )

    state = asyncio.run(lookup(transaction_id, proxy_url, config))
    print(render_text(state, resolve_timezone(config.viewer.timezone)))
    if isinstance(state, Error):
        sys.exit(1)


if __name__ == "__main__":
    main()
