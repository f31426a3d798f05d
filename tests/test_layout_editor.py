"""Tests for LayoutEditor tab management, selection edits and shortcuts."""

from PySide6.QtCore import Qt

from JCLayout.core.selection import Selection
from JCLayout.core.view_store import ViewStore
from JCLayout.layout_editor import LayoutEditor
from JCLayout.model.panel_model import View, Tab, TabLayout, ScreenType, WidgetNode

from conftest import properties


class TestTabs:

    def test_change_tab_clamps(self, editor):
        editor.change_tab(10)
        assert editor.active_tab == 2

        editor.change_tab(-4)
        assert editor.active_tab == 0

    def test_change_tab_without_tabs(self, qapp, registry):
        editor = LayoutEditor(store=ViewStore(View()), registry=registry)

        editor.change_tab(3)

        assert editor.active_tab == 0

    def test_empty_stack_tab_turns_on_edit_mode(self, editor):
        assert editor.is_editable(1)
        assert not editor.is_editable(0)
        assert not editor.is_editable(2)

        editor.change_tab(1)

        assert editor.editable is True

    def test_new_tab_name(self, editor, store):
        store.current_tree().tabs.append(Tab(name='tab 7'))

        assert editor.get_new_tab_name() == 'Tab 8'

    def test_new_tab(self, editor, store):
        tab = editor.new_tab()

        tabs = store.current_tree().tabs
        assert tabs[-1] is tab
        assert tab.name == 'Tab 3'
        assert tab.icon == 'star'
        assert tab.layout == TabLayout.Stack
        assert tab.panels == []
        assert editor.active_tab == 3
        assert editor.editable is True

    def test_duplicate_tab(self, editor, store):
        duplicated = editor.duplicate_tab()

        tabs = store.current_tree().tabs
        assert len(tabs) == 4
        assert duplicated.name == 'Tab 3'
        assert duplicated.panels == tabs[0].panels
        assert duplicated.panels is not tabs[0].panels
        assert editor.active_tab == 3

    def test_screen_tabs(self, editor, store):
        snapshot = editor.add_snapshot_tab()
        sequencer = editor.add_sequencer_tab()

        assert snapshot.layout == TabLayout.Screen
        assert snapshot.screen.type == ScreenType.Snapshot
        assert snapshot.icon == 'save'
        assert sequencer.name == 'Sequences'
        assert sequencer.screen.type == ScreenType.Sequencer
        assert editor.active_tab == 4

    def test_rename_tab(self, editor, store, dialogs):
        dialogs.rename_answer = 'Lighting'

        assert editor.rename_tab() is True
        assert store.current_tree().tabs[0].name == 'Lighting'

    def test_rename_to_same_name_is_ignored(self, editor, store, dialogs):
        dialogs.rename_answer = 'Tab 1'

        assert editor.rename_tab() is False
        assert store.commit_count == 0

    def test_delete_tab_requires_confirmation(self, editor, store, dialogs):
        dialogs.confirm_answer = False

        assert editor.delete_tab(0) is False
        assert len(store.current_tree().tabs) == 3

    def test_delete_last_tab_moves_active_tab(self, editor, store):
        editor.change_tab(2)

        assert editor.delete_tab(2) is True
        assert [tab.name for tab in store.current_tree().tabs] == ['Tab 1', 'Tab 2']
        assert editor.active_tab == 1

    def test_delete_out_of_range_tab(self, editor, store):
        assert editor.delete_tab(5) is False
        assert store.commit_count == 0

    def test_change_tab_icon(self, editor, store, dialogs):
        dialogs.icon_answer = 'bolt'

        assert editor.change_tab_icon() is True
        assert store.current_tree().tabs[0].icon == 'bolt'

    def test_change_tab_icon_cancelled(self, editor, store):
        assert editor.change_tab_icon() is False
        assert store.commit_count == 0


class TestSelection:

    def test_select_requires_edit_mode(self, editor):
        editor.select(Selection('0.widgets', 0, 'A'))
        assert editor.selection is None

        editor.set_editable(True)
        editor.select(Selection('0.widgets', 0, 'A'))
        assert editor.selection == Selection('0.widgets', 0, 'A')

    def test_toggling_edit_mode_clears_selection(self, editor):
        editor.set_editable(True)
        editor.select(Selection('0.widgets', 0, 'A'))

        editor.set_editable(False)

        assert editor.selection is None

    def test_delete_selected(self, editor, store, dialogs):
        editor.set_editable(True)
        editor.select(Selection('0.widgets', 1, 'B'))

        assert editor.delete_selected() is True
        assert properties(store.current_tree().tabs[0].panels[0].widgets) == ['A', 'C']
        assert dialogs.messages == ['Are you sure you want to delete ?']
        assert editor.selection is None

    def test_delete_selected_declined(self, editor, store, dialogs):
        dialogs.confirm_answer = False
        editor.set_editable(True)
        editor.select(Selection('0.widgets', 1, 'B'))

        assert editor.delete_selected() is False
        assert store.commit_count == 0

    def test_delete_selected_outside_edit_mode(self, editor, store):
        editor.selection = Selection('0.widgets', 1, 'B')

        assert editor.delete_selected() is False

    def test_delete_selected_from_missing_container(self, editor, store):
        editor.set_editable(True)
        editor.select(Selection('4.widgets', 0, None))

        assert editor.delete_selected() is False

    def test_vector_drawer_only_for_composites(self, editor):
        editor.set_vector_drawer(WidgetNode(widget='Slider'))
        assert editor.vector is None

        vector = WidgetNode(widget='Vector', widgets=[WidgetNode(widget='Slider')])
        editor.set_vector_drawer(vector)
        assert editor.vector is vector


class TestShortcuts:

    def test_delete_key_with_shift_skips_confirmation(self, editor, store, dialogs):
        editor.set_editable(True)
        editor.select(Selection('0.widgets', 0, 'A'))

        assert editor.handle_key(Qt.Key_Delete, Qt.ShiftModifier) is True
        assert dialogs.messages == []
        assert properties(store.current_tree().tabs[0].panels[0].widgets) == ['B', 'C']

    def test_delete_key_in_text_input_is_ignored(self, editor, store):
        editor.set_editable(True)
        editor.select(Selection('0.widgets', 0, 'A'))

        assert editor.handle_key(Qt.Key_Delete, Qt.NoModifier, from_text_input=True) is False
        assert store.commit_count == 0

    def test_digit_shortcuts(self, editor):
        assert editor.handle_key(Qt.Key_2, Qt.ControlModifier) is True
        assert editor.active_tab == 1

        assert editor.handle_key(Qt.Key_0, Qt.ControlModifier) is True
        assert editor.active_tab == 2

    def test_digits_need_a_modifier(self, editor):
        assert editor.handle_key(Qt.Key_2, Qt.NoModifier) is False
        assert editor.active_tab == 0

    def test_arrow_shortcuts(self, editor):
        editor.handle_key(Qt.Key_Right, Qt.ControlModifier)
        assert editor.active_tab == 1

        editor.handle_key(Qt.Key_Left, Qt.MetaModifier)
        assert editor.active_tab == 0

    def test_toggle_edit_mode(self, editor):
        editor.handle_key(Qt.Key_E, Qt.ControlModifier)
        assert editor.editable is True

        editor.handle_key(Qt.Key_E, Qt.ControlModifier)
        assert editor.editable is False
