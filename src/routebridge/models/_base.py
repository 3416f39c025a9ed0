"""Base model and enum for bridge data.

Every bridge model inherits from :class:`BridgeBaseModel` which is
frozen: values handed to consumers are immutable snapshots.

Closed vocabularies inherit from :class:`BridgeEnum`.  Member values are
the exact wire names; any other spelling raises ``ValueError``.
"""

from __future__ import annotations

import enum
import re

from pydantic import BaseModel, ConfigDict

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(value: str) -> str:
    """Convert ``camelCase`` to ``snake_case`` (``canActivate`` -> ``can_activate``)."""
    return _CAMEL_BOUNDARY.sub("_", value).lower()


class BridgeEnum(enum.StrEnum):
    """Base for closed string vocabularies."""

    @property
    def attribute(self) -> str:
        """Name of the router attribute this wire name maps to."""
        return camel_to_snake(self.value)


class BridgeBaseModel(BaseModel):
    """Base for immutable bridge models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )
