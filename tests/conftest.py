"""
Shared fixtures for the JCLayout test suite.

The sample view has three tabs:
    0 'Tab 1'   root: [Panel(A Slider, B Button, C Toggle), List(Item 1: [Panel(D Dial)])]
    1 'Tab 2'   an empty Stack tab
    2 'Snapshot' a Screen tab
"""

import os

import pytest

# Run Qt headless unless a platform is explicitly chosen.
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from JCLayout.core.drop_zone_registry import DropZoneRegistry, ZoneKind, ALL_TYPES
from JCLayout.core.view_store import ViewStore
from JCLayout.layout_editor import LayoutEditor
from JCLayout.model.panel_model import (View, Tab, Screen, PanelNode, ListNode, ListItem, WidgetNode,
                                        TabLayout, WidgetTypes)


def widget(widget_type, prop):
    return WidgetNode(widget=widget_type, property=prop)


def make_view():
    return View(tabs=[
        Tab(name='Tab 1', icon='star', panels=[
            PanelNode(widgets=[
                widget(WidgetTypes.Slider, 'A'),
                widget(WidgetTypes.Button, 'B'),
                widget(WidgetTypes.Toggle, 'C'),
            ]),
            ListNode(items=[
                ListItem(label='Item 1', panels=[PanelNode(widgets=[widget(WidgetTypes.Dial, 'D')])]),
            ]),
        ]),
        Tab(name='Tab 2', icon='circle', panels=[]),
        Tab(name='Snapshot', icon='save', layout=TabLayout.Screen, screen=Screen()),
    ])


def properties(container):
    return [node.property for node in container]


class FakeDialogs:
    """Scripted answers for the confirmation, rename and icon dialogs."""

    def __init__(self, confirm=True, rename=None, icon=None):
        self.confirm_answer = confirm
        self.rename_answer = rename
        self.icon_answer = icon
        self.messages = []

    def confirm(self, message):
        self.messages.append(message)
        return self.confirm_answer

    def rename(self, current, title):
        return self.rename_answer

    def pick_icon(self, current):
        return self.icon_answer


@pytest.fixture
def view():
    return make_view()


@pytest.fixture
def registry():
    registry = DropZoneRegistry()
    registry.register('root', '', ALL_TYPES, ZoneKind.ROOT)
    registry.register('panel0', '0.widgets', [WidgetTypes.Slider, WidgetTypes.Button,
                                              WidgetTypes.Toggle, WidgetTypes.Dial], ZoneKind.PANEL)
    registry.register('panel0-inline', '0.widgets', ALL_TYPES, ZoneKind.PANEL)
    registry.register('list1', '1.items.0.panels', ALL_TYPES, ZoneKind.LIST)
    registry.register('list1-node', '1', ALL_TYPES, ZoneKind.LIST)
    return registry


@pytest.fixture
def store(view):
    return ViewStore(view)


@pytest.fixture
def dialogs():
    return FakeDialogs()


@pytest.fixture
def editor(qapp, store, registry, dialogs):
    return LayoutEditor(store=store, registry=registry, dialogs=dialogs, icons=['star'])
