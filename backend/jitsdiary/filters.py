# jitsdiary/filters.py
"""
Parameterized filter expressions for the record store.

Placeholders use the ``{:name}`` form understood by the PocketBase SDKs:

    build_filter("user_id = {:uid} && date >= {:since}", uid=user_id, since="2024-01-01")

Bound values are rendered as literals (strings quoted and escaped), so
caller-supplied text can never change the shape of the expression.
"""
from __future__ import annotations
import re
from datetime import date, datetime
from typing import Any

_PLACEHOLDER = re.compile(r"\{:(\w+)\}")


def quote(value: Any) -> str:
    """Render a Python value as a filter literal."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, datetime):
        value = value.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3] + "Z"
    elif isinstance(value, date):
        value = value.isoformat()
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def build_filter(expr: str, **params: Any) -> str:
    def substitute(m: re.Match) -> str:
        name = m.group(1)
        if name not in params:
            raise KeyError(f"missing filter parameter '{name}'")
        return quote(params[name])

    return _PLACEHOLDER.sub(substitute, expr)
