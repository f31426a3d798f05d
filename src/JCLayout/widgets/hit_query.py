from PySide6.QtCore import QPoint
from PySide6.QtWidgets import QApplication, QWidget

from ..core.hover_tracker import HitElement

TAB_PREFIX_PROPERTY = "tabPrefix"
TAB_VALUE_PROPERTY = "tabValue"
DROP_ZONE_PROPERTY = "dropZoneId"


def mark_tab_target(widget: QWidget, prefix: str, value):
    """Tags a tab header so hovering it during a drag switches to that tab."""
    widget.setProperty(TAB_PREFIX_PROPERTY, prefix)
    widget.setProperty(TAB_VALUE_PROPERTY, str(value))


def mark_drop_zone(widget: QWidget, zone_id: str):
    """Tags a widget as the hit area of a registered drop zone."""
    widget.setProperty(DROP_ZONE_PROPERTY, zone_id)


def hit_element_for(widget: QWidget) -> HitElement:
    prefix = widget.property(TAB_PREFIX_PROPERTY)
    value = widget.property(TAB_VALUE_PROPERTY)
    zone_id = widget.property(DROP_ZONE_PROPERTY)
    return HitElement(
        tab_prefix=prefix or None,
        tab_value=str(value) if value is not None else None,
        zone_id=zone_id or None
    )


def elements_from_widget(widget: QWidget) -> list[HitElement]:
    """The widget and its ancestors, innermost first, as hit elements."""
    elements = []
    while widget is not None:
        elements.append(hit_element_for(widget))
        widget = widget.parentWidget()
    return elements


class WidgetHitQuery:
    """Hit-testing surface over live Qt widgets, using global screen coordinates."""

    def elements_at(self, x: int, y: int) -> list[HitElement]:
        widget = QApplication.widgetAt(QPoint(x, y))
        if widget is None:
            return []
        return elements_from_widget(widget)
