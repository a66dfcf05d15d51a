import unittest

from sitebuild.selection import TagSelection, TagSelectionState


class TagSelectionTests(unittest.TestCase):
    def test_toggle_adds_then_removes(self) -> None:
        start = TagSelection.of({"#x"})
        added = start.toggle("#y")

        self.assertIn("#y", added)
        self.assertEqual(added.toggle("#y"), start)

    def test_toggle_returns_new_snapshot(self) -> None:
        start = TagSelection()
        after = start.toggle("#a")

        self.assertIsNot(start, after)
        self.assertTrue(start.is_empty)
        self.assertEqual(len(after), 1)

    def test_double_toggle_is_identity_for_any_selection(self) -> None:
        for tags in (set(), {"#a"}, {"#a", "#b"}):
            for tag in ("#a", "#c"):
                selection = TagSelection.of(tags)
                self.assertEqual(selection.toggle(tag).toggle(tag), selection)

    def test_reset_always_empty(self) -> None:
        for tags in (set(), {"#a"}, {"#a", "#b", "#c"}):
            self.assertEqual(TagSelection.of(tags).reset(), TagSelection())

    def test_iteration_is_sorted(self) -> None:
        self.assertEqual(list(TagSelection.of({"#b", "#a"})), ["#a", "#b"])


class TagSelectionStateTests(unittest.TestCase):
    def test_initial_state_is_empty(self) -> None:
        self.assertTrue(TagSelectionState().selection.is_empty)

    def test_toggle_and_reset(self) -> None:
        state = TagSelectionState()
        state.toggle("#a")
        state.toggle("#b")
        self.assertTrue(state.is_selected("#a"))
        self.assertEqual(len(state.selection), 2)

        state.toggle("#a")
        self.assertFalse(state.is_selected("#a"))

        self.assertEqual(state.reset(), TagSelection())
        self.assertTrue(state.selection.is_empty)

    def test_focus_selects_only_one_tag(self) -> None:
        state = TagSelectionState(TagSelection.of({"#a", "#b"}))
        self.assertEqual(state.focus("#c"), TagSelection.of({"#c"}))

    def test_states_are_independent(self) -> None:
        first = TagSelectionState()
        second = TagSelectionState()
        first.toggle("#a")
        self.assertTrue(second.selection.is_empty)


if __name__ == "__main__":
    unittest.main()
