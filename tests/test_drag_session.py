"""Tests for drag items, sessions and selections."""

from JCLayout.core.drag_session import DragItem, DragKind, DragSession, DropOutcome, DropLocation, DropKind
from JCLayout.core.selection import Selection


class TestDragItem:

    def test_widget_suffix(self):
        item = DragItem.parse('DRAWER_Slider')

        assert item.kind is DragKind.WIDGET
        assert item.type_tag == 'Slider'
        assert item.widget_type == 'Slider'
        assert item.reorder is False

    def test_panel_and_list_suffix(self):
        assert DragItem.parse('DRAWER_PANEL').kind is DragKind.PANEL
        assert DragItem.parse('DRAWER_LIST').kind is DragKind.LIST
        assert DragItem.parse('DRAWER_LIST').widget_type is None

    def test_reorder_marker(self):
        item = DragItem.parse('REORDER_0.widgets_2_Color Picker')

        assert item.reorder is True
        assert item.type_tag == 'Color Picker'

    def test_id_without_separator(self):
        assert DragItem.parse('Toggle').type_tag == 'Toggle'


class TestDragSession:

    def test_detach_happens_once(self):
        container = ['a', 'b', 'c']
        session = DragSession(item=DragItem.parse('REORDER_1_Button'))

        first = session.detach(container, 1)
        second = session.detach(container, 0)

        assert first == ['b']
        assert second is first
        assert container == ['a', 'c']

    def test_external_staging(self):
        session = DragSession(item=DragItem.parse('DRAWER_Slider'))

        session.stage_external(['new'])
        session.stage_external(['other'])

        assert session.staged == ['new']
        assert session.external is True
        assert session.detach(['x'], 0) == ['new']

    def test_cancelled_outcome(self):
        outcome = DropOutcome.cancelled(DropLocation('zone', 1))

        assert outcome.destination is None
        assert outcome.kind is DropKind.DEFAULT


class TestSelection:

    def test_encode(self):
        assert Selection('0.widgets', 2, 'Intensity').encode() == '0.widgets_2_Intensity'
        assert Selection('', 0).encode() == '_0_null'

    def test_parse(self):
        assert Selection.parse('0.widgets_2_Intensity') == Selection('0.widgets', 2, 'Intensity')
        assert Selection.parse('_0_null') == Selection('', 0, None)
        assert Selection.parse('1.items.0.panels_3_Light_Color') == Selection('1.items.0.panels', 3, 'Light_Color')

    def test_parse_invalid(self):
        assert Selection.parse(None) is None
        assert Selection.parse('garbage') is None
        assert Selection.parse('0.widgets_x_null') is None
