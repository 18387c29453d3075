"""Developer helpers: pretty printing, shutdown messages and the splash banner."""

from __future__ import annotations

import json
from typing import Any

from apekit.components import to_jsonable

SPLASH = r"""
     /\
    /  \   _ __   ___
   / /\ \ | '_ \ / _ \
  / ____ \| |_) |  __/
 /_/    \_\ .__/ \___|
          | |
   jaxfu  |_|  v0.1.8
	"""

SHUTDOWN_MESSAGE = "\nSHUTTING DOWN...\n\t\u2713 Server closed..."

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _escape_html(text: str) -> str:
    return "".join(_HTML_ESCAPES.get(char, char) for char in text)


def pretty_print(value: Any) -> str | None:
    """Print ``value`` as JSON indented by two spaces and return the text.

    When the value cannot be encoded, the error is printed and None returned.
    """
    try:
        text = json.dumps(
            to_jsonable(value), indent=2, ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as exc:
        print(f"PrettyPrint: {exc}")
        return None
    text = _escape_html(text)
    print(text)
    return text


def shutdown() -> str:
    """Print the shutdown notice and return it."""
    print(SHUTDOWN_MESSAGE)
    return SHUTDOWN_MESSAGE