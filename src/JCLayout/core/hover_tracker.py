import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from PySide6.QtCore import QObject, QTimer, Signal

from .drag_state import DragState
from .drag_session import DragItem
from .drop_zone_registry import DropZoneRegistry

logger = logging.getLogger(__name__)

DEFAULT_HOVER_DELAY_MS = 300


@dataclass(frozen=True)
class HitElement:
    """One element under the pointer as seen by the tracker."""
    tab_prefix: Optional[str] = None
    tab_value: Optional[str] = None
    zone_id: Optional[str] = None

    @property
    def is_tab_target(self) -> bool:
        return bool(self.tab_prefix) and self.tab_value is not None


class HitQuery(Protocol):
    def elements_at(self, x: int, y: int) -> Sequence[HitElement]:
        """Elements under the point, topmost first."""
        ...


class PointerHoverTracker(QObject):
    """
    Resolves pointer samples during a drag into hover feedback.

    Tab-switch targets are reported after the pointer lingers for the hover
    delay; drop zones are reported immediately when they accept the dragged type.
    """

    # Args: zone id (str) or None when no eligible zone is under the pointer
    droppable_changed = Signal(object)

    # Args: "<prefix>_<value>" of the tab the pointer lingered over
    hover_tab_changed = Signal(str)

    def __init__(self, registry: DropZoneRegistry, hit_query: Optional[HitQuery] = None,
                 hover_delay_ms: int = DEFAULT_HOVER_DELAY_MS, parent=None):
        super().__init__(parent)
        self.registry = registry
        self.hit_query = hit_query
        self.state = DragState.IDLE
        self.droppable: Optional[str] = None
        self.hover_tab: Optional[str] = None
        self._item: Optional[DragItem] = None
        self._pending_tab: Optional[str] = None

        self._hover_timer = QTimer(self)
        self._hover_timer.setSingleShot(True)
        self._hover_timer.setInterval(hover_delay_ms)
        self._hover_timer.timeout.connect(self._on_hover_timeout)

    @property
    def hover_delay_ms(self) -> int:
        return self._hover_timer.interval()

    def is_dragging(self) -> bool:
        return self.state == DragState.DRAGGING

    def start_drag(self, item: DragItem):
        self._cancel_hover()
        self._item = item
        self.state = DragState.DRAGGING

    def end_drag(self):
        """Stops tracking. A pending tab hover never fires after this."""
        self._cancel_hover()
        self._item = None
        self.state = DragState.IDLE
        self.hover_tab = None
        self._set_droppable(None)

    def handle_pointer_move(self, x: int, y: int):
        """Processes one pointer sample. Ignored unless a drag is in progress."""
        if self.state != DragState.DRAGGING or self.hit_query is None:
            return
        self.process_elements(self.hit_query.elements_at(x, y))

    def process_elements(self, elements: Sequence[HitElement]):
        if self.state != DragState.DRAGGING:
            return

        # Every new sample supersedes a pending tab hover
        self._cancel_hover()

        tab = next((el for el in elements if el.is_tab_target), None)
        if tab is not None:
            self._pending_tab = f"{tab.tab_prefix}_{tab.tab_value}"
            self._hover_timer.start()
            return

        zone = next((el for el in elements if el.zone_id), None)
        if zone is None:
            self._set_droppable(None)
            return

        if self.registry.is_droppable(zone.zone_id, self._item.type_tag):
            self._set_droppable(zone.zone_id)
        else:
            self._set_droppable(None)

    def _cancel_hover(self):
        self._hover_timer.stop()
        self._pending_tab = None

    def _on_hover_timeout(self):
        tab, self._pending_tab = self._pending_tab, None
        if tab is None or self.state != DragState.DRAGGING:
            return
        if tab != self.hover_tab:
            self.hover_tab = tab
            self.hover_tab_changed.emit(tab)

    def _set_droppable(self, zone_id: Optional[str]):
        if zone_id == self.droppable:
            return
        self.droppable = zone_id
        self.droppable_changed.emit(zone_id)
