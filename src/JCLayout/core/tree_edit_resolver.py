import copy
import logging
from dataclasses import dataclass
from typing import Optional

from ..model.panel_model import View, PanelNode, ListNode, ListItem, WidgetNode, WidgetTypes, contains_container
from ..model.tree_paths import parse_path, resolve, resolve_container
from .drag_session import DragSession, DragKind, DropKind, DropOutcome
from .drop_zone_registry import DropZoneRegistry, ZoneKind
from .selection import Selection

logger = logging.getLogger(__name__)

COMPACT_WIDGET_TYPES = frozenset({
    WidgetTypes.Button,
    WidgetTypes.ColorPicker,
    WidgetTypes.MiniColorPicker,
    WidgetTypes.Toggle,
})

BOXED_ZONE_KINDS = (ZoneKind.ROOT, ZoneKind.LIST)

DEFAULT_LIST_LABEL = 'Item 1'


def clamp_index(index: int, length: int) -> int:
    return min(max(0, index), length)


@dataclass
class EditResult:
    """A fully applied edit, ready to be committed as a whole."""
    view: View
    selection: Optional[Selection] = None
    active_tab: Optional[int] = None
    clear_selection: bool = True


class TreeEditResolver:
    """
    Turns a finished drag into exactly one structural edit.

    Edits are applied to a private copy of the view, so an aborted edit leaves
    the committed tree untouched and the caller only ever commits a complete tree.
    """

    def __init__(self, registry: DropZoneRegistry, compact_types=COMPACT_WIDGET_TYPES):
        self.registry = registry
        self.compact_types = frozenset(compact_types)

    def resolve(self, view: View, tab_index: int, session: DragSession,
                outcome: DropOutcome) -> Optional[EditResult]:
        """
        Computes the edit for a drop.

        Args:
            view: The currently committed view (not modified)
            tab_index: The active tab the drag happened in
            session: The live drag session
            outcome: Where the item was released

        Returns:
            EditResult, or None when the drop must be discarded without mutation
        """
        if outcome.destination is None:
            return None

        working = copy.deepcopy(view)

        if outcome.kind == DropKind.HEADER_TABS:
            return self._reorder_header(working, outcome)

        if not 0 <= tab_index < len(working.tabs):
            logger.warning("Drop ignored: active tab %d does not exist", tab_index)
            return None
        tab = working.tabs[tab_index]

        if outcome.kind in (DropKind.TABS_REORDER, DropKind.LIST_REORDER):
            return self._reorder_entries(working, tab.panels, outcome)

        return self._place(working, tab, session, outcome)

    def _reorder_header(self, working: View, outcome: DropOutcome) -> Optional[EditResult]:
        tabs = working.tabs
        source_index = outcome.source.index
        if not 0 <= source_index < len(tabs):
            logger.debug("Header reorder ignored: source index %d out of range", source_index)
            return None

        tab = tabs.pop(source_index)
        destination_index = clamp_index(outcome.destination.index, len(tabs))
        tabs.insert(destination_index, tab)
        return EditResult(view=working, active_tab=destination_index)

    def _reorder_entries(self, working: View, root: Optional[list], outcome: DropOutcome) -> Optional[EditResult]:
        drop = self.registry.get(outcome.destination.zone_id)
        if drop is None or root is None:
            return None

        node = resolve(root, drop.path)
        field_name = 'tabs' if outcome.kind == DropKind.TABS_REORDER else 'items'
        if field_name not in getattr(type(node), 'container_fields', ()):
            logger.debug("Reorder ignored: '%s' does not hold %s", drop.path, field_name)
            return None

        entries = getattr(node, field_name)
        source_index = outcome.source.index
        if not 0 <= source_index < len(entries):
            return None

        entry = entries.pop(source_index)
        entries.insert(clamp_index(outcome.destination.index, len(entries)), entry)
        return EditResult(view=working, clear_selection=False)

    def _place(self, working: View, tab, session: DragSession, outcome: DropOutcome) -> Optional[EditResult]:
        drop = self.registry.get(outcome.destination.zone_id)
        if drop is None:
            return None

        if tab.panels is None:
            tab.panels = []
        root = tab.panels

        # Resolved before detaching so sibling shifts cannot retarget the drop
        destination = resolve_container(root, drop.path, create=True)
        if destination is None:
            logger.warning("Drop ignored: zone '%s' path '%s' does not resolve", drop.id, drop.path)
            return None

        index = outcome.destination.index
        item = session.item

        if item.kind is DragKind.LIST:
            label = DEFAULT_LIST_LABEL
            if session.staged and isinstance(session.staged[0], ListNode) and session.staged[0].items:
                label = session.staged[0].items[0].label
            previous = list(destination)
            del destination[:]
            nodes = [ListNode(items=[ListItem(label=label, panels=previous)])]
        else:
            if session.external:
                nodes = copy.deepcopy(session.staged)
                if not nodes:
                    return None
            elif session.is_staged:
                logger.warning("Drop ignored: '%s' was already moved by this drag", item.draggable_id)
                return None
            else:
                nodes = self._detach_source(root, session, outcome, destination)
                if nodes is None:
                    return None
                index = self._compensate_index(session, outcome, drop, nodes, index)

            if item.kind is DragKind.WIDGET and drop.kind in BOXED_ZONE_KINDS:
                nodes = [PanelNode(widgets=nodes)]

        index = clamp_index(index, len(destination))
        destination[index:index] = nodes

        selection = Selection(path=drop.path, index=index, property=getattr(nodes[0], 'property', None))
        return EditResult(view=working, selection=selection)

    def _detach_source(self, root: list, session: DragSession, outcome: DropOutcome,
                       destination: list) -> Optional[list]:
        if session.origin_zone_id is not None and self.registry.get(session.origin_zone_id) is None:
            logger.warning("Drop ignored: origin zone '%s' is no longer registered", session.origin_zone_id)
            return None

        source = resolve_container(root, session.origin_path)
        source_index = outcome.source.index
        if source is None or not 0 <= source_index < len(source):
            logger.warning("Drop ignored: nothing to move at '%s'[%d]", session.origin_path, source_index)
            return None

        if contains_container(source[source_index], destination):
            logger.debug("Drop ignored: cannot move a node into its own subtree")
            return None

        return session.detach(source, source_index)

    def _compensate_index(self, session: DragSession, outcome: DropOutcome, drop, nodes: list,
                          index: int) -> int:
        """
        Compact widgets moved forward between two zones that share one container
        land one slot early once the source is detached.
        """
        moved = nodes[0] if nodes else None
        if (isinstance(moved, WidgetNode)
                and moved.widget in self.compact_types
                and _same_path(drop.path, session.origin_path)
                and outcome.destination.zone_id != outcome.source.zone_id
                and outcome.source.index < index):
            return index - 1
        return index


def _same_path(first: str, second: str) -> bool:
    try:
        return parse_path(first) == parse_path(second)
    except ValueError:
        return False
