import json
import logging

from .panel_model import (View, Tab, Screen, PanelNode, ListNode, TabsNode, ListItem, WidgetNode,
                          PanelType, TabLayout, AnyNode)

logger = logging.getLogger(__name__)


class LayoutSerializer:
    """
    Converts a View to and from the plain dictionary form the store persists.
    Panel containers are tagged with a `type` key; widgets carry a `widget` key.
    """

    def save_layout_to_json(self, view: View) -> str:
        """
        Serializes the entire view to a JSON string.

        Args:
            view: The view to serialize

        Returns:
            str: JSON text that load_layout_from_json() accepts
        """
        return json.dumps(self.serialize_view(view))

    def load_layout_from_json(self, data: str) -> View:
        """
        Rebuilds a view from JSON produced by save_layout_to_json().
        Malformed JSON raises ValueError.
        """
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error deserializing layout data: {e}") from e
        return self.deserialize_view(payload)

    def serialize_view(self, view: View) -> dict:
        return {'tabs': [self._serialize_tab(tab) for tab in view.tabs]}

    def deserialize_view(self, data: dict) -> View:
        return View(tabs=[self._deserialize_tab(tab) for tab in data.get('tabs', [])])

    def _serialize_tab(self, tab: Tab) -> dict:
        tab_data = {
            'name': tab.name,
            'icon': tab.icon,
            'layout': tab.layout,
        }
        if tab.panels is not None:
            tab_data['panels'] = [self._serialize_node(node) for node in tab.panels]
        if tab.screen is not None:
            tab_data['screen'] = {'type': tab.screen.type}
        return tab_data

    def _deserialize_tab(self, tab_data: dict) -> Tab:
        panels = tab_data.get('panels')
        screen = tab_data.get('screen')
        return Tab(
            name=tab_data.get('name', ''),
            icon=tab_data.get('icon', 'square'),
            layout=tab_data.get('layout', TabLayout.Stack),
            panels=[self._deserialize_node(node) for node in panels] if panels is not None else None,
            screen=Screen(type=screen['type']) if screen else None
        )

    def _serialize_node(self, node: AnyNode) -> dict:
        """
        Recursively serializes a tree node to a dictionary.

        Args:
            node: The node to serialize

        Returns:
            dict: Serialized node data
        """
        if isinstance(node, PanelNode):
            node_data = {
                'type': PanelType.Panel,
                'widgets': [self._serialize_node(child) for child in node.widgets]
            }
            if node.title is not None:
                node_data['title'] = node.title
            return node_data
        elif isinstance(node, ListNode):
            return {
                'type': PanelType.List,
                'items': [self._serialize_item(item) for item in node.items]
            }
        elif isinstance(node, TabsNode):
            return {
                'type': PanelType.Tabs,
                'tabs': [self._serialize_item(item) for item in node.tabs]
            }
        elif isinstance(node, WidgetNode):
            node_data = dict(node.options)
            node_data['widget'] = node.widget
            if node.property is not None:
                node_data['property'] = node.property
            if node.label is not None:
                node_data['label'] = node.label
            if node.widgets is not None:
                node_data['widgets'] = [self._serialize_node(child) for child in node.widgets]
            return node_data
        raise ValueError(f"Cannot serialize node of type {type(node).__name__}")

    def _serialize_item(self, item: ListItem) -> dict:
        return {
            'label': item.label,
            'panels': [self._serialize_node(child) for child in item.panels]
        }

    def _deserialize_node(self, node_data: dict) -> AnyNode:
        """
        Recursively recreates a tree node from serialized data.
        Unknown node types raise ValueError.
        """
        if 'widget' in node_data:
            options = {key: value for key, value in node_data.items()
                       if key not in ('widget', 'property', 'label', 'widgets')}
            widgets = node_data.get('widgets')
            return WidgetNode(
                widget=node_data['widget'],
                property=node_data.get('property'),
                label=node_data.get('label'),
                widgets=[self._deserialize_node(child) for child in widgets] if widgets is not None else None,
                options=options
            )

        node_type = node_data.get('type')
        if node_type == PanelType.Panel:
            return PanelNode(
                widgets=[self._deserialize_node(child) for child in node_data.get('widgets', [])],
                title=node_data.get('title')
            )
        elif node_type == PanelType.List:
            return ListNode(items=[self._deserialize_item(item) for item in node_data.get('items', [])])
        elif node_type == PanelType.Tabs:
            return TabsNode(tabs=[self._deserialize_item(item) for item in node_data.get('tabs', [])])

        logger.warning("Unknown node type in layout data: %r", node_type)
        raise ValueError(f"Unknown node type '{node_type}'")

    def _deserialize_item(self, item_data: dict) -> ListItem:
        return ListItem(
            label=item_data.get('label', ''),
            panels=[self._deserialize_node(child) for child in item_data.get('panels', [])]
        )
