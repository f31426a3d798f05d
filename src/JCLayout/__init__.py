from .layout_editor import LayoutEditor, EditorSignals
from .core.drop_zone_registry import DropZoneRegistry, ZoneKind, ALL_TYPES, get_registry
from .core.drag_session import DragItem, DragKind, DragSession, DropKind, DropLocation, DropOutcome
from .core.hover_tracker import PointerHoverTracker, HitElement
from .core.selection import Selection
from .core.tree_edit_resolver import TreeEditResolver, EditResult
from .core.view_store import ViewStore
from .model.panel_model import (View, Tab, Screen, PanelNode, ListNode, TabsNode, ListItem, WidgetNode,
                                TabLayout, PanelType, WidgetTypes, ScreenType)
from .model.layout_serializer import LayoutSerializer
