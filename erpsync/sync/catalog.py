# erpsync Entity Catalog
# Dependency graph of importable entities and the orders derived from it

from __future__ import annotations

import heapq
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from erpsync.errors import CatalogError

if TYPE_CHECKING:
    from erpsync.config.schema import EntityConfig, ErpSyncConfig


@dataclass(frozen=True)
class EntityDefinition:
    """Catalog input: one entity as declared in configuration."""

    key: str
    label: str
    description: str = ""
    enabled: bool = True
    depends_on: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntityDescriptor:
    """
    An entity placed in the catalog.

    import_rank is the 1-based position in the import order. Every
    dependency of an entity has a strictly smaller rank.
    """

    key: str
    label: str
    enabled: bool
    import_rank: int
    description: str = ""
    depends_on: tuple[str, ...] = field(default=())


class EntityCatalog:
    """
    Read-only registry of entities.

    Both the import order and the delete order are derived from the same
    dependency graph: import is a stable topological sort (ties broken by
    declaration order), delete is its exact reverse.
    """

    def __init__(self, definitions: Iterable[EntityDefinition]):
        """
        Build and validate the catalog.

        Args:
            definitions: Entity definitions in declaration order.

        Raises:
            CatalogError: On duplicate keys, unknown dependencies or cycles.
        """
        self._definitions: dict[str, EntityDefinition] = {}
        for definition in definitions:
            if definition.key in self._definitions:
                raise CatalogError(f"Duplicate entity key: '{definition.key}'")
            self._definitions[definition.key] = definition

        for definition in self._definitions.values():
            for dep in definition.depends_on:
                if dep not in self._definitions:
                    raise CatalogError(f"Entity '{definition.key}' depends on unknown entity '{dep}'")
                if dep == definition.key:
                    raise CatalogError(f"Entity '{definition.key}' depends on itself")

        order = _stable_topological_order(self._definitions)
        self._descriptors: dict[str, EntityDescriptor] = {}
        for rank, key in enumerate(order, start=1):
            definition = self._definitions[key]
            self._descriptors[key] = EntityDescriptor(
                key=key,
                label=definition.label,
                enabled=definition.enabled,
                import_rank=rank,
                description=definition.description,
                depends_on=definition.depends_on,
            )
        self._import_order = order

    @classmethod
    def from_mapping(cls, entities: Mapping[str, EntityConfig]) -> EntityCatalog:
        """Build a catalog from an ordered mapping of key to EntityConfig."""
        return cls(
            EntityDefinition(
                key=key,
                label=entity.label,
                description=entity.description,
                enabled=entity.enabled,
                depends_on=tuple(entity.depends_on),
            )
            for key, entity in entities.items()
        )

    @classmethod
    def from_config(cls, config: ErpSyncConfig) -> EntityCatalog:
        """Build a catalog from the loaded configuration."""
        return cls.from_mapping(config.entities)

    def __contains__(self, key: object) -> bool:
        return key in self._descriptors

    def __iter__(self) -> Iterator[EntityDescriptor]:
        """Iterate descriptors in declaration order."""
        return (self._descriptors[key] for key in self._definitions)

    def __len__(self) -> int:
        return len(self._descriptors)

    def get(self, key: str) -> EntityDescriptor | None:
        """Get a descriptor by key."""
        return self._descriptors.get(key)

    def label_for(self, key: str) -> str:
        """Label of an entity, falling back to its key."""
        descriptor = self._descriptors.get(key)
        return descriptor.label if descriptor else key

    def enabled_keys(self) -> list[str]:
        """Keys of enabled entities in import order."""
        return [d.key for d in self.list_import_order()]

    def list_import_order(self) -> list[EntityDescriptor]:
        """Enabled entities in ascending import rank."""
        return [self._descriptors[key] for key in self._import_order if self._descriptors[key].enabled]

    def list_delete_order(self) -> list[str]:
        """Enabled entity keys in delete order (reverse of the import order)."""
        return [key for key in reversed(self._import_order) if self._descriptors[key].enabled]

    def dependencies_of(self, key: str) -> set[str]:
        """
        Transitive dependencies of an entity.

        Raises:
            KeyError: If the entity is not in the catalog.
        """
        if key not in self._definitions:
            raise KeyError(f"Entity '{key}' not found")

        seen: set[str] = set()
        stack = list(self._definitions[key].depends_on)
        while stack:
            dep = stack.pop()
            if dep in seen:
                continue
            seen.add(dep)
            stack.extend(self._definitions[dep].depends_on)
        return seen


def _stable_topological_order(definitions: Mapping[str, EntityDefinition]) -> list[str]:
    """Kahn's algorithm; among ready entities the earliest declared goes first."""
    position = {key: index for index, key in enumerate(definitions)}
    dependents: dict[str, list[str]] = {key: [] for key in definitions}
    pending: dict[str, int] = {}

    for key, definition in definitions.items():
        deps = set(definition.depends_on)
        pending[key] = len(deps)
        for dep in deps:
            dependents[dep].append(key)

    ready = [(position[key], key) for key, count in pending.items() if count == 0]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        _, key = heapq.heappop(ready)
        order.append(key)
        for dependent in dependents[key]:
            pending[dependent] -= 1
            if pending[dependent] == 0:
                heapq.heappush(ready, (position[dependent], dependent))

    if len(order) != len(definitions):
        remaining = {key for key, count in pending.items() if count > 0}
        cycle = _find_cycle(definitions, remaining)
        raise CatalogError("Dependency cycle: " + " -> ".join(cycle))

    return order


def _find_cycle(definitions: Mapping[str, EntityDefinition], remaining: set[str]) -> list[str]:
    """Walk unresolved dependencies until a key repeats; every unresolved key has one."""
    start = min(remaining, key=list(definitions).index)
    path: list[str] = []
    seen: dict[str, int] = {}
    key = start
    while key not in seen:
        seen[key] = len(path)
        path.append(key)
        key = next(dep for dep in definitions[key].depends_on if dep in remaining)
    return path[seen[key] :] + [key]
