from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

REORDER_PREFIX = 'REORDER'
ID_SEPARATOR = '_'


class DragKind(str, Enum):
    """How a dragged item is placed, selected from the last segment of its draggable id."""
    PANEL = 'PANEL'
    LIST = 'LIST'
    WIDGET = 'WIDGET'


class DropKind(str, Enum):
    """The gesture family a drop belongs to."""
    HEADER_TABS = 'HEADER_TABS'
    TABS_REORDER = 'TABS-REORDER'
    LIST_REORDER = 'LIST-REORDER'
    DEFAULT = 'DEFAULT'


@dataclass(frozen=True)
class DragItem:
    """What is being dragged, parsed once when the drag starts."""
    draggable_id: str
    kind: DragKind
    type_tag: str
    reorder: bool = False

    @property
    def widget_type(self) -> Optional[str]:
        return self.type_tag if self.kind is DragKind.WIDGET else None

    @classmethod
    def parse(cls, draggable_id: str) -> DragItem:
        """
        Builds a DragItem from a draggable id such as ``REORDER_3_Slider`` or
        ``DRAWER_PANEL``. The last ``_`` segment is the type tag.
        """
        type_tag = draggable_id.rsplit(ID_SEPARATOR, 1)[-1]
        if type_tag == DragKind.PANEL.value:
            kind = DragKind.PANEL
        elif type_tag == DragKind.LIST.value:
            kind = DragKind.LIST
        else:
            kind = DragKind.WIDGET
        return cls(
            draggable_id=draggable_id,
            kind=kind,
            type_tag=type_tag,
            reorder=draggable_id.startswith(REORDER_PREFIX)
        )


@dataclass(frozen=True)
class DropLocation:
    zone_id: Optional[str]
    index: int


@dataclass(frozen=True)
class DropOutcome:
    """
    The result of a finished drag gesture.
    `destination` is None when the pointer was released outside any zone or the drag was aborted.
    """
    kind: DropKind
    source: DropLocation
    destination: Optional[DropLocation] = None

    @classmethod
    def cancelled(cls, source: DropLocation, kind: DropKind = DropKind.DEFAULT) -> DropOutcome:
        return cls(kind=kind, source=source, destination=None)


@dataclass
class DragSession:
    """
    A single drag gesture from start to drop.

    The staging buffer holds nodes detached from the tree (or handed in from
    the palette) until the drop inserts them. It is filled at most once.
    """
    item: DragItem
    origin_zone_id: Optional[str] = None
    origin_path: str = ''
    staged: Optional[list] = field(default=None, init=False)
    external: bool = field(default=False, init=False)

    @property
    def is_staged(self) -> bool:
        return self.staged is not None

    def stage_external(self, nodes: list) -> None:
        """Stage nodes that come from outside the tree (e.g. a new widget from the palette)."""
        if self.is_staged:
            logger.warning("Drag session for '%s' is already staged; ignoring external nodes",
                           self.item.draggable_id)
            return
        self.staged = list(nodes)
        self.external = True

    def detach(self, container: list, index: int) -> list:
        """
        Moves exactly one node from `container` into the staging buffer.
        A second call returns the already staged nodes without touching the tree.
        """
        if self.is_staged:
            return self.staged
        self.staged = container[index:index + 1]
        del container[index:index + 1]
        return self.staged
