import logging
from typing import Optional, Protocol

from PySide6.QtCore import QObject, Signal

from ..model.panel_model import View

logger = logging.getLogger(__name__)


class ViewStoreProtocol(Protocol):
    def current_tree(self) -> View:
        ...

    def commit(self, view: View) -> None:
        ...


class ViewStore(QObject):
    """
    Holds the committed view and broadcasts every replacement.
    A commit always swaps in a whole tree; observers never see a partial edit.
    """

    # Args: view (View)
    view_changed = Signal(object)

    def __init__(self, view: Optional[View] = None, parent=None):
        super().__init__(parent)
        self._view = view if view is not None else View()
        self.commit_count = 0

    def current_tree(self) -> View:
        return self._view

    def commit(self, view: View) -> None:
        self._view = view
        self.commit_count += 1
        logger.debug("View committed (%d tabs)", len(view.tabs))
        self.view_changed.emit(view)
