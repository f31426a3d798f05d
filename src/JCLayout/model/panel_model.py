from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Optional, Union

logger = logging.getLogger(__name__)


class TabLayout:
    Stack = 'Stack'
    Screen = 'Screen'


class ScreenType:
    Snapshot = 'Snapshot'
    Sequencer = 'Sequencer'


class PanelType:
    Panel = 'PANEL'
    List = 'LIST'
    Tabs = 'TABS'


class WidgetTypes:
    Dial = 'Dial'
    Dials = 'Dials'
    Slider = 'Slider'
    Sliders = 'Sliders'
    ScaleSlider = 'Scale Slider'
    Joystick = 'Joystick'
    Button = 'Button'
    Toggle = 'Toggle'
    Text = 'Text'
    Label = 'Label'
    Dropdown = 'Dropdown'
    ColorPicker = 'Color Picker'
    MiniColorPicker = 'Mini Color Picker'
    ColorPickerList = 'Color Picker List'
    Vector = 'Vector'
    Spacer = 'Spacer'


# Define a type hint for any node that can sit inside a container
AnyNode = Union['PanelNode', 'ListNode', 'TabsNode', 'WidgetNode']

# --- Node Definitions ---

@dataclass
class WidgetNode:
    """A single control bound to a property. Composite widgets carry nested `widgets`."""
    widget: str
    property: Optional[str] = None
    label: Optional[str] = None
    widgets: Optional[list[WidgetNode]] = None
    options: dict = field(default_factory=dict)

    container_fields: ClassVar[tuple[str, ...]] = ('widgets',)


@dataclass
class PanelNode:
    """A box around an ordered sequence of widgets."""
    widgets: list[AnyNode] = field(default_factory=list)
    title: Optional[str] = None

    type: ClassVar[str] = PanelType.Panel
    container_fields: ClassVar[tuple[str, ...]] = ('widgets',)


@dataclass
class ListItem:
    """One entry of a List or Tabs node. It owns its own ordered panel set."""
    label: str = 'Item 1'
    panels: list[AnyNode] = field(default_factory=list)

    container_fields: ClassVar[tuple[str, ...]] = ('panels',)


@dataclass
class ListNode:
    """A vertical list of labelled items."""
    items: list[ListItem] = field(default_factory=list)

    type: ClassVar[str] = PanelType.List
    container_fields: ClassVar[tuple[str, ...]] = ('items',)


@dataclass
class TabsNode:
    """A nested tab strip. Each tab header is a ListItem."""
    tabs: list[ListItem] = field(default_factory=list)

    type: ClassVar[str] = PanelType.Tabs
    container_fields: ClassVar[tuple[str, ...]] = ('tabs',)


@dataclass
class Screen:
    type: str = ScreenType.Snapshot


@dataclass
class Tab:
    """A top-level tab. Only Stack tabs hold panels; Screen tabs show a fixed screen."""
    name: str
    icon: str = 'square'
    layout: str = TabLayout.Stack
    panels: Optional[list[AnyNode]] = None
    screen: Optional[Screen] = None


@dataclass
class View:
    """The complete persisted tree edited by the layout editor."""
    tabs: list[Tab] = field(default_factory=list)


# --- Traversal helpers ---

def iter_widgets(node) -> Iterator[WidgetNode]:
    """Recursively yields every WidgetNode found in a node, a list of nodes, a tab or a view."""
    if node is None:
        return
    if isinstance(node, list):
        for child in node:
            yield from iter_widgets(child)
    elif isinstance(node, View):
        for tab in node.tabs:
            yield from iter_widgets(tab)
    elif isinstance(node, Tab):
        yield from iter_widgets(node.panels)
    elif isinstance(node, WidgetNode):
        yield node
        yield from iter_widgets(node.widgets)
    else:
        for name in node.container_fields:
            yield from iter_widgets(getattr(node, name))


def count_widgets(node) -> int:
    return sum(1 for _ in iter_widgets(node))


def contains_container(node, container: list) -> bool:
    """True if `container` is `node` itself or any list owned somewhere below it."""
    if node is container:
        return True
    if isinstance(node, list):
        return any(contains_container(child, container) for child in node)
    for name in getattr(node, 'container_fields', ()):
        value = getattr(node, name)
        if value is not None and contains_container(value, container):
            return True
    return False


def format_tree(view: View) -> str:
    """Renders the current state of a view as an indented outline."""
    lines = ["--- PANEL LAYOUT STATE ---"]
    if not view.tabs:
        lines.append("  (No tabs)")
    for i, tab in enumerate(view.tabs):
        lines.append(f"[Tab {i}: '{tab.name}' ({tab.layout}) icon: {tab.icon}]")
        if tab.layout == TabLayout.Screen:
            lines.append(f"  ↳ Screen: {tab.screen.type if tab.screen else None}")
            continue
        for node in tab.panels or []:
            _format_node(node, 1, lines)
    return "\n".join(lines)


def _format_node(node, indent: int, lines: list[str]):
    prefix = "  " * indent
    if isinstance(node, PanelNode):
        lines.append(f"{prefix}↳ Panel - Widgets: {len(node.widgets)}")
        for child in node.widgets:
            _format_node(child, indent + 1, lines)
    elif isinstance(node, (ListNode, TabsNode)):
        entries = node.items if isinstance(node, ListNode) else node.tabs
        kind = "List" if isinstance(node, ListNode) else "Tabs"
        lines.append(f"{prefix}↳ {kind} - Items: {len(entries)}")
        for entry in entries:
            lines.append(f"{prefix}  ↳ '{entry.label}'")
            for child in entry.panels:
                _format_node(child, indent + 2, lines)
    elif isinstance(node, WidgetNode):
        lines.append(f"{prefix}↳ {node.widget}: {node.property or '-'}")
        for child in node.widgets or []:
            _format_node(child, indent + 1, lines)


def log_tree(view: View):
    """Outputs the tree to the module logger at debug level."""
    logger.debug("\n%s", format_tree(view))
