# mirviz/escape.py
"""Escaping for text embedded in Graphviz HTML-like labels.

Graphviz HTML labels are parsed as XML, so `&`, `<`, `>` and quotes must be
entity-encoded. Two flavours are provided: `escape` for table cells and
`escape_text` for the free-flowing caption text, which differ only in how an
embedded newline is turned into a line break.
"""
import re
from typing import Union

from mircore.ir import Debug

# An `&` that starts one of the entities produced below is left alone, which
# keeps escape_html idempotent. Any other `&` is escaped.
_SPECIAL = re.compile(r'(&(?:amp|lt|gt|quot|#x27);)|[&<>"\']')
_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}

CELL_BREAK = "<br/>"
TEXT_BREAK = '<br align="left"/>'


def debug_text(value: Union[Debug, str]) -> str:
    if isinstance(value, Debug):
        return value.fmt_debug()
    if isinstance(value, str):
        return value
    raise TypeError(f"cannot render {type(value).__name__}: not a Debug value")


def escape_html(text: str) -> str:
    return _SPECIAL.sub(lambda m: m.group(1) or _ENTITIES[m.group()], text)


def _escape_lines(value, br: str) -> str:
    lines = debug_text(value).splitlines() or [""]
    return br.join(escape_html(line) for line in lines)


def escape(value: Union[Debug, str]) -> str:
    """Escape the debug text of `value` for use inside a table cell."""
    return _escape_lines(value, CELL_BREAK)


def escape_text(value: Union[Debug, str]) -> str:
    """Escape the debug text of `value` for plain (non-table) label text."""
    return _escape_lines(value, TEXT_BREAK)
