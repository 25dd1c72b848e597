"""
Component type registry — static, in-memory catalog of ComponentDefinition.

No mutation API: new block types are added as modules under blocks/.
"""
from typing import Iterable, Iterator, List, Optional, Set

from .blocks import BUILTIN_DEFINITIONS
from .core.schemas import BlockType, ComponentDefinition


class ComponentRegistry:
    """Keyed, ordered catalog. Construction checks the catalog invariants."""

    def __init__(self, definitions: Iterable[ComponentDefinition]):
        self._ordered: List[ComponentDefinition] = list(definitions)
        self._by_type = {}
        for d in self._ordered:
            if d.type in self._by_type:
                raise ValueError(f"Duplicate component type: {d.type!r}")
            declared = {f.key for f in d.fields}
            undeclared = set(d.default_data) - declared
            if undeclared:
                raise ValueError(
                    f"{d.type}: defaultData keys not declared in fields: {sorted(undeclared)}"
                )
            self._by_type[d.type] = d

    def lookup(self, type_: str) -> Optional[ComponentDefinition]:
        """Definition for a block type, or None (callers render nothing / mark unknown)."""
        return self._by_type.get(type_)

    def list_all(self) -> List[ComponentDefinition]:
        return list(self._ordered)

    def by_category(self, category: str) -> List[ComponentDefinition]:
        return [d for d in self._ordered if d.category == category]

    def categories(self) -> List[str]:
        """Distinct categories in first-seen order (component picker tabs)."""
        seen: List[str] = []
        for d in self._ordered:
            if d.category not in seen:
                seen.append(d.category)
        return seen

    def __contains__(self, type_: object) -> bool:
        return type_ in self._by_type

    def __iter__(self) -> Iterator[ComponentDefinition]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)


def categories_of(definitions: Iterable[ComponentDefinition]) -> Set[str]:
    return {d.category for d in definitions}


REGISTRY = ComponentRegistry(BUILTIN_DEFINITIONS)

# Every closed-set tag must have a catalog entry
_missing = [t.value for t in BlockType if t.value not in REGISTRY]
if _missing:
    raise ValueError(f"BlockType values without a definition: {_missing}")

COMPONENT_TYPES = REGISTRY.list_all()


# ── Module-level helpers ────────────────────────────────────────────────────

def get_component_definition(type_: str) -> Optional[ComponentDefinition]:
    return REGISTRY.lookup(type_)


def get_components_by_category(category: str) -> List[ComponentDefinition]:
    return REGISTRY.by_category(category)


def get_all_categories() -> List[str]:
    return REGISTRY.categories()
