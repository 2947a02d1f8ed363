"""
Message templates for unique sub-errors.

A template is a plain string with `{PATH}`, `{VALUE}` and `{TYPE}` tokens, e.g.
"Path `{PATH}` ({VALUE}) is not unique.". Tokens are substituted with plain
string replacement, so any other braces in a custom message are left untouched.
"""

from typing import Any

DEFAULT_MESSAGE = "Path `{PATH}` ({VALUE}) is not unique."


def render_value(value: Any) -> str:
    """
    String rendering of an attempted value for use inside a message.

    bytes-like values are decoded as UTF-8, lists/tuples are joined with "," and
    everything else goes through str() (ObjectId -> hex, datetime -> ISO-ish).
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return ",".join(render_value(item) for item in value)
    return str(value)


def format_message(template: str, *, path: str, value: Any, kind: str = "unique") -> str:
    return (
        template
        .replace("{PATH}", path)
        .replace("{VALUE}", render_value(value))
        .replace("{TYPE}", kind)
    )


__all__ = ["DEFAULT_MESSAGE", "render_value", "format_message"]
