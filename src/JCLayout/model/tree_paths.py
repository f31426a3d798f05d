"""
Addressing into a tab's panel tree.

A path is a dot-joined sequence of container keys and indices walked from a
tab's root panel list, e.g. ``"1.items.0.panels"``. Bracketed indices
(``"[1].items[0].panels"``) are accepted too. The empty path is the root list.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class ContainerKey:
    """A named container field on a node, e.g. ``widgets`` or ``items``."""
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Index:
    """A position inside an ordered container."""
    value: int

    def __str__(self):
        return str(self.value)


PathSegment = Union[ContainerKey, Index]


def parse_path(path: Optional[str]) -> tuple[PathSegment, ...]:
    """Splits a path string into typed segments. Raises ValueError on malformed input."""
    if not path:
        return ()

    normalized = path.replace('[', '.').replace(']', '')
    segments = []
    for part in normalized.split('.'):
        if not part:
            continue
        if part.lstrip('-').isdigit():
            value = int(part)
            if value < 0:
                raise ValueError(f"Negative index '{part}' in path '{path}'")
            segments.append(Index(value))
        elif part.isidentifier():
            segments.append(ContainerKey(part))
        else:
            raise ValueError(f"Invalid path segment '{part}' in path '{path}'")
    return tuple(segments)


def format_path(segments) -> str:
    return '.'.join(str(segment) for segment in segments)


def join_path(path: str, *extra) -> str:
    """Appends segments (ints become indices, strings keys) to an existing path."""
    segments = list(parse_path(path))
    for item in extra:
        segments.append(Index(item) if isinstance(item, int) else ContainerKey(item))
    return format_path(segments)


def resolve(root: list, path: Optional[str]):
    """
    Walks `path` from `root` and returns the node or container found there.
    Returns None when any step is missing: an index out of range, a key the
    node does not own, or an unset container.
    """
    try:
        segments = parse_path(path)
    except ValueError:
        return None

    current = root
    for segment in segments:
        current = _step(current, segment)
        if current is None:
            return None
    return current


def resolve_container(root: list, path: Optional[str], create: bool = False) -> Optional[list]:
    """
    Resolves `path` to an ordered container (a list).
    With `create`, a final container field that is still unset is created empty.
    """
    try:
        segments = parse_path(path)
    except ValueError:
        return None
    if not segments:
        return root

    parent = root
    for segment in segments[:-1]:
        parent = _step(parent, segment)
        if parent is None:
            return None

    last = segments[-1]
    container = _step(parent, last)
    if container is None and create and isinstance(last, ContainerKey) and _owns(parent, last):
        container = []
        setattr(parent, last.name, container)

    return container if isinstance(container, list) else None


def _owns(node, key: ContainerKey) -> bool:
    return key.name in getattr(type(node), 'container_fields', ())


def _step(current, segment: PathSegment):
    if isinstance(segment, Index):
        if not isinstance(current, list) or segment.value >= len(current):
            return None
        return current[segment.value]

    if isinstance(current, list) or not _owns(current, segment):
        return None
    return getattr(current, segment.name)
