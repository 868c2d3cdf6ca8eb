import dataclasses
from typing import Dict, FrozenSet, Iterable, List

from libsync.config import GENERIC_NAMES
from libsync.models import Dependency

ESCAPED_CHARS = frozenset("-.:")


def escape_name(name: str) -> str:
    """Lowercases `name` and replaces `-`, `.` and `:` with underscores."""
    return "".join("_" if c in ESCAPED_CHARS else c.lower() for c in name)


def resolve_names(
    dependencies: Iterable[Dependency], denylist: FrozenSet[str] = GENERIC_NAMES
) -> List[Dependency]:
    """
    Assigns a unique constant name to every dependency.

    The short name (`escape_name(name)`) is used unless it is too generic or
    another dependency claims the same short name; in both cases the group is
    prepended. When two dependencies share a short name, both get the
    qualified form, including the one that claimed it first.

    A qualified name is not checked again for collisions, so two entries with
    the same group and name end up with the same constant name and only the
    first one is kept.

    Args:
        dependencies: Dependencies in report order.
        denylist: Short names that always require the group prefix.

    Returns:
        New Dependency instances with `escaped_name` set, deduplicated by that
        name and sorted alphabetically by it.
    """
    generic = {escape_name(n) for n in denylist}
    ordered = list(dependencies)
    names: List[str] = []
    claimed: Dict[str, int] = {}

    for index, dependency in enumerate(ordered):
        short_key = escape_name(dependency.name)
        qualified_key = escape_name(f"{dependency.group}_{dependency.name}")

        if short_key in generic:
            names.append(qualified_key)
        elif short_key in claimed:
            names.append(qualified_key)
            first = claimed[short_key]
            names[first] = escape_name(f"{ordered[first].group}_{ordered[first].name}")
        else:
            claimed[short_key] = index
            names.append(short_key)

    seen: Dict[str, Dependency] = {}
    for dependency, name in zip(ordered, names):
        if name not in seen:
            seen[name] = dataclasses.replace(dependency, escaped_name=name)

    return [seen[name] for name in sorted(seen)]


class NameResolver:
    """Resolves constant names with a fixed denylist."""

    def __init__(self, denylist: FrozenSet[str] = GENERIC_NAMES):
        self.denylist = denylist

    def resolve(self, dependencies: Iterable[Dependency]) -> List[Dependency]:
        return resolve_names(dependencies, self.denylist)
