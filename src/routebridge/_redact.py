"""Log hygiene for navigation commands and router states.

Route params routinely carry credentials: password-reset and invite
tokens, session ids copied from query strings, API keys in deep links.
:func:`redact_for_log` masks them before a command or state reaches a
log record.

A key is sensitive when, lower-cased and stripped of separators, it ends
with one of :data:`SENSITIVE_KEY_SUFFIXES`.  ``resetToken``,
``invite_token`` and ``X-Api-Key`` are all masked; ``tokenCount`` is not.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from routebridge.models.commands import Command
from routebridge.models.state import RouterState

SENSITIVE_KEY_SUFFIXES: tuple[str, ...] = (
    "password",
    "passwd",
    "secret",
    "token",
    "apikey",
    "authorization",
    "cookie",
    "session",
    "sessionid",
)

REDACTED = "<redacted>"

_SEPARATORS = re.compile(r"[-_.\s]")
_MAX_DEPTH = 20


def is_sensitive_key(key: object) -> bool:
    normalized = _SEPARATORS.sub("", str(key)).lower()
    return normalized.endswith(SENSITIVE_KEY_SUFFIXES)


def redact_for_log(value: Any, *, max_string: int = 256) -> Any:
    """Return a copy of *value* safe to put in a log record.

    Router states keep their name and path with params masked; meta is
    omitted.  Commands render as ``[method, *args]``.  Callables (a
    navigate ``done`` callback) are replaced by a placeholder.
    """
    return _redact(value, max_string, 0)


def _redact(value: Any, max_string: int, depth: int) -> Any:
    if depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, RouterState):
        redacted_state: dict[str, Any] = {"name": value.name, "params": _redact(value.params, max_string, depth + 1)}
        if value.path is not None:
            redacted_state["path"] = _redact(value.path, max_string, depth + 1)
        return redacted_state
    if isinstance(value, Command):
        return [value.method.value, *(_redact(arg, max_string, depth + 1) for arg in value.args)]
    if isinstance(value, BaseModel):
        return _redact(value.model_dump(), max_string, depth + 1)

    if isinstance(value, Mapping):
        return {
            str(key): REDACTED if is_sensitive_key(key) else _redact(item, max_string, depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, Sequence):
        return [_redact(item, max_string, depth + 1) for item in value]
    if callable(value):
        return "<callable>"
    return f"<{type(value).__name__}>"
