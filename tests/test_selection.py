"""Bookmark list invariants and state-machine transitions.

Covers wraparound, delete reindexing, duplicate suppression, and the
terminating/selection transitions driven by decoded events.
"""

from __future__ import annotations

import unittest

from bm.input import CTRL_Q, Direction, InputEvent
from bm.selection import CONTINUE, QUIT, BookmarkList, SelectionStateMachine, Transition

UP = InputEvent.arrow(Direction.UP)
DOWN = InputEvent.arrow(Direction.DOWN)
DELETE = InputEvent.normal(ord("d"))
ENTER = InputEvent.normal(ord("\n"))


class BookmarkListTests(unittest.TestCase):
    def test_empty_list_has_no_cursor(self) -> None:
        bookmarks = BookmarkList()
        self.assertEqual(len(bookmarks), 0)
        self.assertIsNone(bookmarks.cursor)
        self.assertIsNone(bookmarks.current)
        self.assertFalse(bookmarks.move_up())
        self.assertFalse(bookmarks.move_down())
        self.assertIsNone(bookmarks.delete_current())

    def test_first_add_places_cursor_at_zero(self) -> None:
        bookmarks = BookmarkList()
        self.assertTrue(bookmarks.add("/a"))
        self.assertEqual(bookmarks.cursor, 0)
        self.assertEqual(bookmarks.current, "/a")

    def test_adding_same_path_twice_keeps_one_entry(self) -> None:
        bookmarks = BookmarkList(["/a", "/b"])
        self.assertFalse(bookmarks.add("/a"))
        self.assertEqual(bookmarks.paths, ("/a", "/b"))

    def test_constructor_drops_duplicates_in_first_seen_order(self) -> None:
        bookmarks = BookmarkList(["/b", "/a", "/b"])
        self.assertEqual(bookmarks.paths, ("/b", "/a"))

    def test_up_from_top_wraps_to_bottom(self) -> None:
        bookmarks = BookmarkList(["/a", "/b", "/c", "/d"])
        bookmarks.move_up()
        self.assertEqual(bookmarks.cursor, 3)

    def test_down_from_bottom_wraps_to_top(self) -> None:
        bookmarks = BookmarkList(["/a", "/b", "/c"])
        bookmarks.move_up()
        self.assertEqual(bookmarks.cursor, 2)
        bookmarks.move_down()
        self.assertEqual(bookmarks.cursor, 0)

    def test_single_entry_wraps_onto_itself(self) -> None:
        bookmarks = BookmarkList(["/a"])
        bookmarks.move_up()
        self.assertEqual(bookmarks.cursor, 0)
        bookmarks.move_down()
        self.assertEqual(bookmarks.cursor, 0)

    def test_delete_last_entry_steps_cursor_back(self) -> None:
        bookmarks = BookmarkList(["/a", "/b", "/c"])
        bookmarks.move_up()
        self.assertEqual(bookmarks.delete_current(), "/c")
        self.assertEqual(bookmarks.paths, ("/a", "/b"))
        self.assertEqual(bookmarks.cursor, 1)

    def test_delete_middle_entry_keeps_index_on_shifted_entry(self) -> None:
        bookmarks = BookmarkList(["/a", "/b", "/c"])
        bookmarks.move_down()
        self.assertEqual(bookmarks.delete_current(), "/b")
        self.assertEqual(bookmarks.cursor, 1)
        self.assertEqual(bookmarks.current, "/c")

    def test_delete_first_entry_keeps_cursor_at_zero(self) -> None:
        bookmarks = BookmarkList(["/a", "/b"])
        bookmarks.delete_current()
        self.assertEqual(bookmarks.cursor, 0)
        self.assertEqual(bookmarks.current, "/b")

    def test_delete_only_entry_clears_cursor(self) -> None:
        bookmarks = BookmarkList(["/a"])
        self.assertEqual(bookmarks.delete_current(), "/a")
        self.assertEqual(len(bookmarks), 0)
        self.assertIsNone(bookmarks.cursor)


class SelectionStateMachineTests(unittest.TestCase):
    def test_quit_events_terminate_without_mutation(self) -> None:
        for event in (InputEvent.control(CTRL_Q), InputEvent.normal(ord("q"))):
            with self.subTest(event=event):
                bookmarks = BookmarkList(["/a", "/b"])
                machine = SelectionStateMachine(bookmarks)
                self.assertEqual(machine.apply(event), QUIT)
                self.assertEqual(bookmarks.paths, ("/a", "/b"))
                self.assertEqual(bookmarks.cursor, 0)

    def test_reserved_events_are_no_ops(self) -> None:
        bookmarks = BookmarkList(["/a", "/b"])
        machine = SelectionStateMachine(bookmarks)
        for event in (
            InputEvent.alt(ord("d")),
            InputEvent.shift_arrow(Direction.DOWN),
            InputEvent.arrow(Direction.LEFT),
            InputEvent.arrow(Direction.RIGHT),
            InputEvent.unknown(),
            InputEvent.normal(ord("x")),
            InputEvent.control(3),
        ):
            with self.subTest(event=event):
                self.assertEqual(machine.apply(event), CONTINUE)
        self.assertEqual(bookmarks.paths, ("/a", "/b"))
        self.assertEqual(bookmarks.cursor, 0)

    def test_carriage_return_also_selects(self) -> None:
        bookmarks = BookmarkList(["/a", "/b"])
        machine = SelectionStateMachine(bookmarks)
        machine.apply(DOWN)
        self.assertEqual(machine.apply(InputEvent.normal(ord("\r"))), Transition(done=True, selected="/b"))

    def test_enter_on_empty_list_does_not_select(self) -> None:
        machine = SelectionStateMachine(BookmarkList())
        self.assertEqual(machine.apply(ENTER), CONTINUE)
        self.assertEqual(machine.apply(DELETE), CONTINUE)

    def test_navigate_delete_and_select_scenario(self) -> None:
        bookmarks = BookmarkList(["/a", "/b", "/c"])
        machine = SelectionStateMachine(bookmarks)

        machine.apply(DOWN)
        machine.apply(DOWN)
        self.assertEqual(bookmarks.cursor, 2)

        self.assertEqual(machine.apply(DELETE), CONTINUE)
        self.assertEqual(bookmarks.paths, ("/a", "/b"))
        self.assertEqual(bookmarks.cursor, 1)

        machine.apply(UP)
        self.assertEqual(bookmarks.cursor, 0)

        transition = machine.apply(ENTER)
        self.assertTrue(transition.done)
        self.assertEqual(transition.selected, "/a")


if __name__ == "__main__":
    unittest.main()
