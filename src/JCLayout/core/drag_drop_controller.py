import logging
from typing import Optional

from .drag_session import DragItem, DragSession, DropOutcome

logger = logging.getLogger(__name__)


class DragDropController:
    """
    Handles all drag and drop gestures for the layout editor.
    Owns the single live DragSession from drag start to drop.
    """

    def __init__(self, manager):
        """
        Initialize with reference to the LayoutEditor for coordination.

        Args:
            manager: Reference to the LayoutEditor instance
        """
        self.manager = manager
        self.session: Optional[DragSession] = None

    def is_dragging(self) -> bool:
        return self.session is not None

    def begin_drag(self, draggable_id: str, origin_zone_id: Optional[str] = None,
                   staged: Optional[list] = None) -> DragSession:
        """
        Starts a drag gesture.

        Args:
            draggable_id: Id of the dragged item; its last '_' segment is the type tag
            origin_zone_id: The zone the item is dragged out of
            staged: Nodes that do not come from the tree (palette drags)

        Returns:
            DragSession: The new live session
        """
        if self.session is not None:
            logger.warning("Drag '%s' started while '%s' was still live; discarding the stale session",
                           draggable_id, self.session.item.draggable_id)
            self._discard()

        item = DragItem.parse(draggable_id)
        origin_zone = self.manager.registry.get(origin_zone_id)
        if origin_zone_id is not None and origin_zone is None:
            logger.warning("Drag '%s' started from unregistered zone '%s'; its drop will be ignored",
                           draggable_id, origin_zone_id)
        session = DragSession(
            item=item,
            origin_zone_id=origin_zone_id,
            origin_path=origin_zone.path if origin_zone else ''
        )
        if staged is not None:
            session.stage_external(staged)

        if not item.reorder:
            self.manager.set_selection(None)

        self.session = session
        self.manager.hover_tracker.start_drag(item)
        return session

    def lock_widget(self, nodes: list):
        """Hands palette nodes to the live session before it drops."""
        if self.session is None:
            logger.debug("lock_widget called without a live drag")
            return
        self.session.stage_external(nodes)

    def handle_pointer_move(self, x: int, y: int):
        if self.session is None:
            return
        self.manager.hover_tracker.handle_pointer_move(x, y)

    def end_drag(self, outcome: DropOutcome) -> bool:
        """
        Completes the gesture and commits the resulting edit.

        Returns:
            bool: True if the tree was changed
        """
        session, self.session = self.session, None
        self.manager.hover_tracker.end_drag()

        if session is None:
            logger.debug("end_drag called without a live drag")
            return False

        if outcome.destination is None:
            self.manager.set_selection(None)
            return False

        store = self.manager.store
        result = self.manager.resolver.resolve(store.current_tree(), self.manager.active_tab, session, outcome)
        if result is None:
            self.manager.set_selection(None)
            return False

        store.commit(result.view)

        if result.active_tab is not None:
            self.manager.change_tab(result.active_tab)
        if result.clear_selection:
            self.manager.set_selection(result.selection)
        self.manager.on_layout_committed()
        return True

    def cancel_drag(self):
        """Aborts the live drag without touching the tree."""
        if self.session is None:
            return
        self._discard()
        self.manager.set_selection(None)

    def _discard(self):
        self.session = None
        self.manager.hover_tracker.end_drag()
