"""Server-rendered HTML for the transaction detail viewer."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from tx_viewer.viewer.formatting import detail_rows, input_rows, output_rows, summary_rows
from tx_viewer.viewer.state import Error, Loading, Success

if TYPE_CHECKING:
    from datetime import tzinfo

    from tx_viewer.viewer.formatting import ScriptRow
    from tx_viewer.viewer.state import State

PAGE_TITLE = "Transaction Details"

_STYLES = """
body { font-family: sans-serif; margin: 2rem; color: #1f2937; }
.transaction-container { margin-bottom: 1.5rem; }
.transaction-form { display: flex; gap: 0.5rem; }
.transaction-input { flex: 1; padding: 0.5rem; font-family: monospace; }
.transaction-button { padding: 0.5rem 1rem; }
.info-row { padding: 0.25rem 0; }
.info-label { font-weight: bold; }
.info-value { font-family: monospace; word-break: break-all; }
.transaction-table { border-collapse: collapse; width: 100%; }
.transaction-table td, .transaction-table th {
  border: 1px solid #d1d5db; padding: 0.4rem; font-family: monospace; word-break: break-all;
}
.error { color: #b91c1c; }
"""


def _form(transaction_id: str) -> str:
    return f"""
<div class="transaction-container">
  <form class="container transaction-form" method="get" action="/">
    <input class="transaction-input" type="text" name="transaction_id"
           value="{escape(transaction_id)}" placeholder="Enter Transaction ID">
    <button class="transaction-button" type="submit">Fetch Transaction Data</button>
  </form>
</div>"""


def _info_panel(rows: list[tuple[str, str]]) -> str:
    body = "\n<hr>\n".join(
        f'<div class="info-row"><span class="info-label">{escape(label)}: </span>'
        f'<span class="info-value">{escape(value)}</span></div>'
        for label, value in rows
    )
    return f"""
<div class="transaction-details">
  <div class="transaction-info">
{body}
  </div>
</div>"""


def _details_table(rows: list[tuple[str, str]]) -> str:
    body = "\n".join(
        f"<tr><td>{escape(label)}</td><td>{escape(value)}</td></tr>" for label, value in rows
    )
    return f"""
<div class="transaction-table-container">
  <h3>Details</h3>
  <table class="transaction-table"><tbody>
{body}
  </tbody></table>
</div>"""


def _script_table(title: str, rows: list[ScriptRow]) -> str:
    body = "\n".join(
        f"<tr><td>{row.index}</td><td>{escape(row.addresses)}</td>"
        f"<td>{escape(row.asm)}</td><td>{escape(row.hex)}</td></tr>"
        for row in rows
    )
    return f"""
<div class="transaction-table-container">
  <h3>{escape(title)}</h3>
  <table class="transaction-table">
    <thead><tr><th>Index</th><th>Address</th><th>Sigscript ASM</th><th>Sigscript HEX</th></tr></thead>
    <tbody>
{body}
    </tbody>
  </table>
</div>"""


def _body(state: State, tz: tzinfo | None) -> str:
    if isinstance(state, Loading):
        return "<p>Loading...</p>"
    if isinstance(state, Error):
        return f'<p class="error">{escape(state.message)}</p>'
    if isinstance(state, Success):
        record = state.record
        return f"""
<div class="transaction-container">
  <h2>{PAGE_TITLE}</h2>
  <div class="transaction-container">{_info_panel(summary_rows(record, tz))}</div>
  <div class="transaction-container">{_details_table(detail_rows(record, tz))}</div>
  <div class="transaction-container">{_script_table("Inputs", input_rows(record))}</div>
  <div class="transaction-container">{_script_table("Outputs", output_rows(record))}</div>
</div>"""
    return ""


def render_page(state: State, tz: tzinfo | None = None) -> str:
    """Render the full viewer page for *state*.

    The form is pre-filled with the identifier of the current lookup, if any.
    """
    transaction_id = getattr(state, "transaction_id", "")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{PAGE_TITLE}</title>
<style>{_STYLES}</style>
</head>
<body>
{_form(transaction_id)}
{_body(state, tz)}
</body>
</html>
"""
