"""
Drop-zone registry for the JCLayout editor.

Every droppable area registers itself here each time it is rendered. The
registry is rebuilt rather than diffed, so lookups must tolerate ids that
have gone stale or were never registered.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Optional, Union
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ALL_TYPES = 'ALL'


class ZoneKind(str, Enum):
    """What a drop zone represents. ROOT and LIST zones only hold boxed content."""
    ROOT = 'ROOT'
    PANEL = 'PANEL'
    LIST = 'LIST'
    TABS = 'TABS'
    WIDGETS = 'WIDGETS'


@dataclass(frozen=True)
class DropZone:
    """Information package for a registered drop zone."""
    id: str
    path: str
    accept: frozenset
    kind: ZoneKind

    @property
    def accepts_all(self) -> bool:
        return ALL_TYPES in self.accept

    def accepts(self, type_tag: Optional[str]) -> bool:
        """True if a dragged item with this type tag may be dropped here."""
        return self.accepts_all or (type_tag is not None and type_tag in self.accept)


class DropZoneRegistry:
    """Central map of drop-zone id to the container it represents."""

    def __init__(self):
        self._zones: Dict[str, DropZone] = {}

    def register(self, zone_id: str, path: str = '', accept: Union[str, Iterable[str]] = ALL_TYPES,
                 kind: Union[ZoneKind, str] = ZoneKind.PANEL) -> str:
        """
        Register (or re-register) a drop zone and return its id.

        Args:
            zone_id: Identifier the hit surface reports for this zone
            path: Path of the container this zone inserts into ('' is the tab root)
            accept: The ALL sentinel, or an iterable of accepted type tags
            kind: The zone kind, which decides how bare widgets are boxed
        """
        if not zone_id:
            raise ValueError("Drop zone id must not be empty")

        if isinstance(accept, str):
            accept = [accept]

        self._zones[zone_id] = DropZone(
            id=zone_id,
            path=path or '',
            accept=frozenset(accept),
            kind=ZoneKind(kind)
        )
        return zone_id

    def unregister(self, zone_id: str) -> None:
        self._zones.pop(zone_id, None)

    def clear(self) -> None:
        """Forget every zone, ahead of a full re-render."""
        self._zones.clear()

    def get(self, zone_id: Optional[str]) -> Optional[DropZone]:
        """Get a zone by id, or None for unknown or stale ids."""
        if zone_id is None:
            return None
        zone = self._zones.get(zone_id)
        if zone is None:
            logger.debug("Drop zone '%s' is not registered", zone_id)
        return zone

    def is_droppable(self, zone_id: Optional[str], type_tag: Optional[str]) -> bool:
        """Neutral lookup used by hover feedback: unknown zones are simply not droppable."""
        zone = self.get(zone_id)
        return zone is not None and zone.accepts(type_tag)

    def __contains__(self, zone_id) -> bool:
        return zone_id in self._zones

    def __len__(self) -> int:
        return len(self._zones)

    def get_all_ids(self) -> list[str]:
        return list(self._zones.keys())


_global_registry = DropZoneRegistry()


def get_registry() -> DropZoneRegistry:
    """Get the process-wide drop-zone registry."""
    return _global_registry
