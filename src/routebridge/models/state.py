"""Router state snapshots."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from routebridge.models._base import BridgeBaseModel


def name_to_ids(name: str) -> list[str]:
    """Expand a dot-segmented route name into its ancestry.

    ``"users.view.edit"`` -> ``["users", "users.view", "users.view.edit"]``.
    An empty name has no segments.
    """
    if not name:
        return []
    ids: list[str] = []
    for segment in name.split("."):
        ids.append(f"{ids[-1]}.{segment}" if ids else segment)
    return ids


def is_ancestor_or_self(ancestor: str, name: str) -> bool:
    """Return ``True`` when *ancestor* is *name* or one of its ancestors.

    The root node (empty name) is an ancestor of every node.
    """
    if not ancestor:
        return True
    return name == ancestor or name.startswith(ancestor + ".")


class RouterState(BridgeBaseModel):
    """An immutable snapshot of a router state.

    Two states are equal when their ``name`` and ``params`` are equal;
    ``path`` and ``meta`` are informational only.  Keys the router adds
    beyond these (``title``, ``hash``, ...) are kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    params: dict[str, Any] = Field(default_factory=dict)
    path: str | None = None
    meta: dict[str, Any] | None = Field(
        default=None,
        description="Router metadata; meta['params'] maps segment ids to the params they own.",
    )

    @field_validator("params", mode="before")
    @classmethod
    def _none_params_to_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @classmethod
    def coerce(cls, value: Any) -> RouterState | None:
        """Accept a ``RouterState``, a state mapping, or ``None``."""
        if value is None or isinstance(value, RouterState):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(f"Cannot interpret {type(value).__name__} as a router state")

    @property
    def segment_ids(self) -> list[str]:
        return name_to_ids(self.name)

    def segment_params(self, segment_id: str) -> dict[str, Any] | None:
        """Params owned by *segment_id*, or ``None`` without metadata."""
        meta_params = (self.meta or {}).get("params")
        if not isinstance(meta_params, Mapping):
            return None
        owned = meta_params.get(segment_id)
        if owned is None:
            return {}
        return {key: self.params.get(key) for key in owned}

    @property
    def has_meta_params(self) -> bool:
        return isinstance((self.meta or {}).get("params"), Mapping)

    def is_descendant_of(self, name: str) -> bool:
        return self.name != name and is_ancestor_or_self(name, self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RouterState):
            return NotImplemented
        return self.name == other.name and self.params == other.params

    def __hash__(self) -> int:
        return hash(self.name)
