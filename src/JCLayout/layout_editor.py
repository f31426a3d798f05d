import copy
import logging
import random
import re
from typing import Optional, Protocol

from PySide6.QtCore import QObject, Qt, Signal

from .core.drag_drop_controller import DragDropController
from .core.drop_zone_registry import DropZoneRegistry, get_registry
from .core.hover_tracker import PointerHoverTracker, HitQuery, DEFAULT_HOVER_DELAY_MS
from .core.selection import Selection
from .core.tree_edit_resolver import TreeEditResolver
from .core.view_store import ViewStore
from .model.panel_model import View, Tab, Screen, TabLayout, ScreenType, WidgetNode, log_tree
from .model.tree_paths import resolve_container

logger = logging.getLogger(__name__)

DEFAULT_ICONS = ['square', 'star', 'circle', 'bolt', 'cube', 'sliders-h', 'palette', 'camera', 'film', 'lightbulb']
NEW_TAB_NAME_PATTERN = re.compile(r'^Tab (\d+)$', re.IGNORECASE)



class EditorDialogs(Protocol):
    def confirm(self, message: str) -> bool:
        ...

    def rename(self, current: str, title: str) -> Optional[str]:
        ...

    def pick_icon(self, current: str) -> Optional[str]:
        ...


class EditorSignals(QObject):
    """
    A collection of signals to allow the presentation layer to follow the editor.
    """
    # Emitted whenever the selected item changes.
    # Args: selection (Selection or None)
    selection_changed = Signal(object)

    # Emitted when another top-level tab becomes active.
    # Args: tab index (int)
    tab_changed = Signal(int)

    # Args: editable (bool)
    editable_changed = Signal(bool)

    # Emitted when the vector drawer opens or closes.
    # Args: widget (WidgetNode or None)
    vector_changed = Signal(object)

    # A general signal emitted after every committed edit.
    layout_changed = Signal()


def _key_code(key) -> int:
    return key.value if hasattr(key, 'value') else int(key)


_DIGIT_CODES = {_key_code(getattr(Qt, f'Key_{n}')): n for n in range(10)}


class LayoutEditor(QObject):
    """
    The editor facade: active tab, edit mode, selection and every edit that
    shares the view with the drag engine.
    """

    def __init__(self, store=None, registry: Optional[DropZoneRegistry] = None,
                 hit_query: Optional[HitQuery] = None, dialogs: Optional[EditorDialogs] = None,
                 hover_delay_ms: int = DEFAULT_HOVER_DELAY_MS, icons=None, parent=None):
        super().__init__(parent)
        self.store = store if store is not None else ViewStore()
        self.registry = registry if registry is not None else get_registry()
        self.dialogs = dialogs
        self.icons = list(icons) if icons else list(DEFAULT_ICONS)
        self.debug_mode = False
        self.signals = EditorSignals()

        self.active_tab = 0
        self.editable = False
        self.selection: Optional[Selection] = None
        self.vector: Optional[WidgetNode] = None

        self.hover_tracker = PointerHoverTracker(self.registry, hit_query, hover_delay_ms, parent=self)
        self.resolver = TreeEditResolver(self.registry)
        self.drag_controller = DragDropController(self)

    @property
    def view(self) -> View:
        return self.store.current_tree()

    def set_debug_mode(self, enabled: bool):
        self.debug_mode = enabled

    def on_layout_committed(self):
        if self.debug_mode:
            log_tree(self.view)
        self.signals.layout_changed.emit()

    def _commit(self, view: View):
        self.store.commit(view)
        self.on_layout_committed()

    # --- Selection and edit mode ---

    def set_selection(self, selection: Optional[Selection]):
        if selection == self.selection:
            return
        self.selection = selection
        self.signals.selection_changed.emit(selection)

    def select(self, selection: Optional[Selection]):
        """User selection, only honoured in edit mode."""
        if not self.editable:
            return
        self.set_selection(selection)

    def set_editable(self, editable: bool):
        if editable == self.editable:
            return
        self.editable = editable
        self.set_selection(None)
        self.signals.editable_changed.emit(editable)

    def set_vector_drawer(self, widget: Optional[WidgetNode] = None):
        """Opens the vector drawer for a composite widget, closes it for anything else."""
        vector = widget if widget is not None and widget.widgets else None
        self.vector = vector
        self.signals.vector_changed.emit(vector)

    # --- Tabs ---

    def is_editable(self, index: int) -> bool:
        """An empty Stack tab is always editable."""
        tabs = self.view.tabs
        if not 0 <= index < len(tabs):
            return False
        tab = tabs[index]
        return tab.layout == TabLayout.Stack and not tab.panels

    def change_tab(self, index: int):
        count = len(self.view.tabs)
        index = min(max(0, index), count - 1) if count else 0
        self.active_tab = index
        self.vector = None
        self.set_editable(self.is_editable(index) or self.editable)
        self.signals.tab_changed.emit(index)

    def get_new_tab_name(self) -> str:
        last = 0
        for tab in self.view.tabs:
            match = NEW_TAB_NAME_PATTERN.match(tab.name or '')
            if match:
                last = max(last, int(match.group(1)))
        return f"Tab {last + 1}"

    def new_tab(self) -> Tab:
        view = copy.deepcopy(self.view)
        tab = Tab(name=self.get_new_tab_name(), icon=random.choice(self.icons),
                  layout=TabLayout.Stack, panels=[])
        view.tabs.append(tab)
        self._commit(view)
        self.change_tab(len(view.tabs) - 1)
        self.set_editable(True)
        return tab

    def duplicate_tab(self) -> Optional[Tab]:
        view = copy.deepcopy(self.view)
        if not 0 <= self.active_tab < len(view.tabs):
            return None
        duplicated = copy.deepcopy(view.tabs[self.active_tab])
        duplicated.name = self.get_new_tab_name()
        view.tabs.append(duplicated)
        self._commit(view)
        self.change_tab(len(view.tabs) - 1)
        self.set_editable(True)
        return duplicated

    def add_snapshot_tab(self) -> Tab:
        return self._add_screen_tab('Snapshot', 'save', ScreenType.Snapshot)

    def add_sequencer_tab(self) -> Tab:
        return self._add_screen_tab('Sequences', 'play', ScreenType.Sequencer)

    def _add_screen_tab(self, name: str, icon: str, screen_type: str) -> Tab:
        view = copy.deepcopy(self.view)
        tab = Tab(name=name, icon=icon, layout=TabLayout.Screen, screen=Screen(type=screen_type))
        view.tabs.append(tab)
        self._commit(view)
        self.change_tab(len(view.tabs) - 1)
        return tab

    def rename_tab(self) -> bool:
        view = copy.deepcopy(self.view)
        if not 0 <= self.active_tab < len(view.tabs) or self.dialogs is None:
            return False
        tab = view.tabs[self.active_tab]
        name = self.dialogs.rename(tab.name, 'Tab title')
        if not name or name == tab.name:
            return False
        tab.name = name
        self._commit(view)
        return True

    def delete_tab(self, index: int) -> bool:
        if self.dialogs is not None and not self.dialogs.confirm('Are you sure you want to delete this tab?'):
            return False
        view = copy.deepcopy(self.view)
        if not 0 <= index < len(view.tabs):
            return False
        del view.tabs[index]
        self._commit(view)
        self.change_tab(min(index, len(view.tabs) - 1))
        return True

    def change_tab_icon(self) -> bool:
        view = copy.deepcopy(self.view)
        if not 0 <= self.active_tab < len(view.tabs) or self.dialogs is None:
            return False
        tab = view.tabs[self.active_tab]
        icon = self.dialogs.pick_icon(tab.icon)
        if not icon:
            return False
        tab.icon = icon
        self._commit(view)
        return True

    # --- Selection edits ---

    def delete_selected(self, skip_confirm: bool = False) -> bool:
        """Removes the selected item from its container."""
        if not self.editable or self.selection is None:
            return False

        view = copy.deepcopy(self.view)
        if not 0 <= self.active_tab < len(view.tabs):
            return False
        tab = view.tabs[self.active_tab]
        widgets = resolve_container(tab.panels or [], self.selection.path)
        if not widgets or not 0 <= self.selection.index < len(widgets):
            return False

        if not skip_confirm and self.dialogs is not None:
            if not self.dialogs.confirm('Are you sure you want to delete ?'):
                return False

        del widgets[self.selection.index]
        self._commit(view)
        self.set_selection(None)
        return True

    # --- Keyboard ---

    def handle_key(self, key, modifiers=Qt.NoModifier, from_text_input: bool = False) -> bool:
        """
        Applies an editor shortcut. Returns True if the key was consumed.

        Delete removes the selection (Shift skips the confirmation). With Ctrl
        or Meta held: digits 1-9 pick a tab, 0 the last tab, E toggles edit
        mode, and Left/Right step between tabs.
        """
        code = _key_code(key)
        shift = bool(modifiers & Qt.ShiftModifier)
        command = bool(modifiers & Qt.ControlModifier) or bool(modifiers & Qt.MetaModifier)

        if code == _key_code(Qt.Key_Delete):
            if from_text_input:
                return False
            return self.delete_selected(skip_confirm=shift)

        if not command:
            return False

        if code in _DIGIT_CODES:
            number = _DIGIT_CODES[code] or len(self.view.tabs) or 1
            self.change_tab(number - 1)
            return True

        if code == _key_code(Qt.Key_E):
            self.set_editable(not self.editable)
            return True
        if code == _key_code(Qt.Key_Left):
            self.change_tab(self.active_tab - 1)
            return True
        if code == _key_code(Qt.Key_Right):
            self.change_tab(self.active_tab + 1)
            return True
        return False

    def handle_key_event(self, event, from_text_input: bool = False) -> bool:
        return self.handle_key(event.key(), event.modifiers(), from_text_input)
