#!/usr/bin/env python3
"""Simple demo script: scripted drags against a small layout, printing the tree after each one."""

import logging
import sys

from PySide6.QtCore import QCoreApplication

# Add the src directory to the path so we can import JCLayout
sys.path.insert(0, 'src')

from JCLayout.layout_editor import LayoutEditor
from JCLayout.core.drop_zone_registry import DropZoneRegistry, ZoneKind, ALL_TYPES
from JCLayout.core.drag_session import DropKind, DropLocation, DropOutcome
from JCLayout.core.view_store import ViewStore
from JCLayout.model.panel_model import View, Tab, PanelNode, WidgetNode, ListNode, ListItem, WidgetTypes, format_tree


def create_view():
    """Create a view with one populated tab and one empty tab."""
    return View(tabs=[
        Tab(name='Tab 1', icon='star', panels=[
            PanelNode(widgets=[
                WidgetNode(widget=WidgetTypes.Slider, property='Intensity'),
                WidgetNode(widget=WidgetTypes.Toggle, property='Visible'),
                WidgetNode(widget=WidgetTypes.ColorPicker, property='Color'),
            ]),
        ]),
        Tab(name='Tab 2', icon='circle', panels=[]),
    ])


def register_zones(registry):
    """Zones a renderer would register while painting Tab 1."""
    registry.clear()
    registry.register('root', '', ALL_TYPES, ZoneKind.ROOT)
    registry.register('panel-0', '0.widgets', ALL_TYPES, ZoneKind.PANEL)


def drop(source_zone, source_index, dest_zone, dest_index, kind=DropKind.DEFAULT):
    return DropOutcome(kind=kind, source=DropLocation(source_zone, source_index),
                       destination=DropLocation(dest_zone, dest_index))


def main():
    logging.basicConfig(level=logging.INFO)
    app = QCoreApplication(sys.argv)

    registry = DropZoneRegistry()
    store = ViewStore(create_view())
    editor = LayoutEditor(store=store, registry=registry)
    editor.signals.selection_changed.connect(
        lambda selection: print(f"Selected: {selection.encode() if selection else None}"))
    register_zones(registry)

    print(format_tree(store.current_tree()))

    print("\nMove 'Visible' to the end of its panel")
    editor.drag_controller.begin_drag('REORDER_1_Toggle', 'panel-0')
    editor.drag_controller.end_drag(drop('panel-0', 1, 'panel-0', 2))
    print(format_tree(store.current_tree()))

    print("\nDrop a new dial from the palette onto the tab root")
    editor.drag_controller.begin_drag('DRAWER_Dial', staged=[WidgetNode(widget=WidgetTypes.Dial, property='Rotation')])
    editor.drag_controller.end_drag(drop('drawer', 0, 'root', 1))
    print(format_tree(store.current_tree()))

    print("\nTurn the first panel into a list")
    editor.drag_controller.begin_drag('DRAWER_LIST', staged=[ListNode(items=[ListItem('Lights')])])
    editor.drag_controller.end_drag(drop('drawer', 0, 'panel-0', 0))
    print(format_tree(store.current_tree()))

    print("\nMove Tab 1 behind Tab 2")
    editor.drag_controller.begin_drag('HEADER_0_TAB')
    editor.drag_controller.end_drag(drop('header', 0, 'header', 1, DropKind.HEADER_TABS))
    print(format_tree(store.current_tree()))
    print(f"Active tab: {editor.active_tab}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
