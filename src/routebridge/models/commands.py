"""Sink command and source query vocabularies."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from routebridge.models._base import BridgeBaseModel, BridgeEnum


class SinkMethod(BridgeEnum):
    """Router methods a command may invoke.

    Values are the command names accepted on the wire; each maps to the
    snake_case router method of the same name.
    """

    CANCEL = "cancel"
    START = "start"
    STOP = "stop"
    NAVIGATE = "navigate"
    CAN_ACTIVATE = "canActivate"
    CAN_DEACTIVATE = "canDeactivate"


class SourceMethod(BridgeEnum):
    """Read-only router queries exposed unchanged on the sources bundle."""

    GET_STATE = "getState"
    BUILD_URL = "buildUrl"
    BUILD_PATH = "buildPath"
    MATCH_URL = "matchUrl"
    MATCH_PATH = "matchPath"
    ARE_STATES_DESCENDANTS = "areStatesDescendants"
    IS_ACTIVE = "isActive"


class Command(BridgeBaseModel):
    """A validated sink command: a method plus its positional arguments."""

    method: SinkMethod
    args: tuple[Any, ...] = Field(default_factory=tuple)

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, value: Any) -> Any:
        if isinstance(value, list):
            return tuple(value)
        return value

    def __str__(self) -> str:
        return str(self.method) if not self.args else f"{self.method}{self.args!r}"
