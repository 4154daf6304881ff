"""Domain entities for the middleware entity hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class EntityKind(str, Enum):
    """Whether a node is a queryable channel or a logical grouping."""

    LEAF = "leaf"
    GROUP = "group"


@dataclass(slots=True)
class EntityNode:
    """
    A node of the entity tree returned by the middleware.

    Only GROUP nodes carry children; LEAF nodes are queryable series.
    `entity_type` keeps the raw middleware type (e.g. "power", "group").
    """

    id: str
    kind: EntityKind
    title: str
    children: List[EntityNode] = field(default_factory=list)
    entity_type: str = ""

    @property
    def is_group(self) -> bool:
        return self.kind is EntityKind.GROUP


@dataclass(frozen=True, slots=True)
class FlatEntity:
    """A leaf entity with its parent-qualified display title."""

    id: str
    display_title: str
