"""Game entities handed out from a fixed-size pool."""

from __future__ import annotations

import weakref
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, List, Optional

NO_ID = 0xFFFFFFFF
NO_CHANNEL = 0xFFFFFFFF
CLEARED_TAGS = 0xFFFFFFFF
DATA_SIZE = 128

EntityCallback = Callable[["Entity"], Any]


@dataclass(eq=False)
class Entity:
    """One game object; compared by identity."""

    id: int = NO_ID
    tags: int = 0
    name: str = "Entity"
    in_use: bool = False
    collide: bool = False
    grounded: bool = False
    on_wall: bool = False
    health: int = 100
    state: int = 0
    channel: int = NO_CHANNEL
    world: Optional[Entity] = None
    parent: Optional[Entity] = None
    x: int = 0
    y: int = 0
    vel_x: float = 0.0
    vel_y: float = 0.0
    on_update: Optional[EntityCallback] = None
    on_ready: Optional[EntityCallback] = None
    on_free: Optional[EntityCallback] = None
    data: bytearray = field(default_factory=lambda: bytearray(DATA_SIZE))
    _renderable: Optional[weakref.ref] = field(default=None, init=False, repr=False)

    def toggle_collide(self) -> bool:
        """Flip collision on or off and return the new setting."""
        self.collide = not self.collide
        return self.collide

    def set_renderable(self, renderable: Any) -> None:
        """Attach a renderable, held weakly; None detaches."""
        self._renderable = weakref.ref(renderable) if renderable is not None else None

    def get_renderable(self) -> Any:
        """The attached renderable, or None if detached or gone."""
        return self._renderable() if self._renderable is not None else None


class EntityPool:
    """A fixed set of entities; new ones come from the free list.

    Entities in use are kept newest first.
    """

    def __init__(self, max_entities: int) -> None:
        if max_entities < 1:
            raise ValueError("an entity pool needs at least one entity")
        self._entities: List[Entity] = [Entity(id=i) for i in range(max_entities)]
        self._free: Deque[Entity] = deque(self._entities)
        self._used: List[Entity] = []

    def __len__(self) -> int:
        return len(self._entities)

    @property
    def active(self) -> tuple[Entity, ...]:
        """Entities in use, newest first."""
        return tuple(self._used)

    def new(self) -> Entity:
        """Take an entity from the free list; raise RuntimeError when none is left."""
        if not self._free:
            raise RuntimeError("entity pool exhausted")
        entity = self._free.popleft()
        entity.in_use = True
        self._used.insert(0, entity)
        return entity

    def free(self, entity: Entity) -> None:
        """Return an entity to the pool, running its on_free callback first."""
        if not any(entity is e for e in self._entities):
            raise ValueError("entity does not belong to this pool")
        if not entity.in_use:
            raise ValueError("entity is not in use")

        self._used.remove(entity)

        if entity.on_free is not None:
            entity.on_free(entity)

        entity.in_use = False
        entity.x = 0
        entity.y = 0
        entity.data[:] = bytes(DATA_SIZE)
        entity.channel = NO_CHANNEL
        entity.collide = False
        entity.grounded = False
        entity.id = NO_ID
        entity.world = None
        entity.name = ""
        entity.tags = CLEARED_TAGS
        entity.state = 0

        self._free.appendleft(entity)

    def get_by_id(self, entity_id: int) -> Optional[Entity]:
        return next((e for e in self._used if e.id == entity_id), None)

    def get_next_tagged(self, entity: Optional[Entity], tag: int) -> Optional[Entity]:
        """The first entity in use after ``entity`` (or from the start) with these tags."""
        start = 0 if entity is None else self._used.index(entity) + 1
        wanted = tag & 0xFFFFFFFF
        return next((e for e in self._used[start:] if e.tags == wanted), None)

    def _live(self):
        for entity in list(self._used):
            if entity.in_use:
                yield entity

    def update(self) -> None:
        """Move each renderable to its entity and run update callbacks."""
        for entity in self._live():
            renderable = entity.get_renderable()
            if renderable is not None:
                renderable.rect.x = entity.x
                renderable.rect.y = entity.y
            if entity.on_update is not None:
                entity.on_update(entity)

    def for_each(self, func: EntityCallback) -> None:
        """Call func on every entity in use; func may free entities."""
        for entity in self._live():
            func(entity)

    def for_all(self, func: EntityCallback) -> None:
        """Call func on every entity in the pool, used or free."""
        for entity in list(self._entities):
            func(entity)