"""Tests for the keyboard mapping and the plugboard."""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from alphabet import ALPHA_ABC, ALPHA_QWERTZ
from defects import DefectKind
from keyboard_and_plugboard import Keyboard, Plugboard


class TestKeyboard(unittest.TestCase):
    def test_forward_and_backward(self):
        kb = Keyboard(ALPHA_QWERTZ)
        self.assertEqual(kb.forward("w"), 1)
        self.assertEqual(kb.backward(1), "W")
        self.assertEqual(len(kb), 26)

    def test_unknown_symbol_uses_fallback(self):
        kb = Keyboard(ALPHA_ABC)
        self.assertEqual(kb.forward("7"), ALPHA_ABC.index("X"))
        self.assertEqual(kb.forward("7", "Q"), ALPHA_ABC.index("Q"))

    def test_backward_out_of_range(self):
        kb = Keyboard(ALPHA_ABC)
        self.assertEqual(kb.backward(40), "X")
        self.assertEqual(kb.backward(-1, "Z"), "Z")

    def test_fallback_must_be_on_keyboard(self):
        with self.assertRaises(ValueError):
            Keyboard("1234567890", "X")

    def test_lower_case_alphabet_is_upper_cased(self):
        kb = Keyboard(ALPHA_ABC.lower(), "x")
        self.assertEqual(kb.alphabet, ALPHA_ABC)
        self.assertEqual(kb.fallback, "X")
        self.assertEqual(kb.forward("a"), 0)
        self.assertEqual(kb.forward("C"), 2)
        self.assertEqual(kb.forward("7"), ALPHA_ABC.index("X"))
        self.assertEqual(kb.backward(99, "q"), "Q")


class TestPlugboard(unittest.TestCase):
    def setUp(self):
        self.board = Plugboard("test", 5, [(0, 2), (1, 3)])

    def test_swaps_both_ways(self):
        self.assertEqual(self.board.encode(2), 0)
        self.assertEqual(self.board.encode(0), 2)
        self.assertEqual(self.board.encode(3), 1)

    def test_unpaired_passes_through(self):
        self.assertEqual(self.board.encode(4), 4)

    def test_is_involution(self):
        for i in range(5):
            self.assertEqual(self.board.encode(self.board.encode(i)), i)

    def test_add_plug_refuses_used_point(self):
        err = self.board.add_plug(0, 4)
        self.assertIsNotNone(err)
        self.assertEqual(err.kind, DefectKind.DUPLICATE)
        self.assertEqual(err.index, 0)
        self.assertEqual(self.board.plugs, [(0, 2), (1, 3)])

    def test_add_plug_refuses_self_and_out_of_range(self):
        board = Plugboard("test", 5)
        self.assertEqual(board.add_plug(3, 3).kind, DefectKind.SELF_PAIR)
        self.assertEqual(board.add_plug(0, 5).kind, DefectKind.OUT_OF_RANGE)
        self.assertEqual(board.add_plug(-1, 2).kind, DefectKind.OUT_OF_RANGE)
        self.assertEqual(board.plugs, [])

    def test_add_plug_accepts_free_points(self):
        board = Plugboard("test", 5)
        self.assertIsNone(board.add_plug(1, 4))
        self.assertEqual(board.encode(4), 1)

    def test_remove_and_reset(self):
        self.assertTrue(self.board.remove_plug(3))
        self.assertFalse(self.board.remove_plug(3))
        self.assertEqual(self.board.encode(1), 1)
        self.board.reset()
        self.assertEqual(self.board.plugs, [])

    def test_validate_clean(self):
        self.assertEqual(self.board.validate(), [])

    def test_validate_reports_every_problem(self):
        board = Plugboard("bad", 5, [(0, 1), (1, 2), (3, 3), (4, 9)])
        kinds = sorted(d.kind.name for d in board.validate())
        self.assertEqual(kinds, ["DUPLICATE", "OUT_OF_RANGE", "SELF_PAIR"])
        dup = [d for d in board.validate() if d.kind is DefectKind.DUPLICATE][0]
        self.assertEqual((dup.index, dup.value), (1, 1))

    def test_from_letters(self):
        board = Plugboard.from_letters("I", ALPHA_ABC, "AB cd")
        self.assertEqual(board.plugs, [(0, 1), (2, 3)])
        board = Plugboard.from_letters("I", ALPHA_ABC, [("E", "F"), "GH"])
        self.assertEqual(board.plugs, [(4, 5), (6, 7)])

    def test_from_letters_rejects_garbage(self):
        with self.assertRaises(ValueError):
            Plugboard.from_letters("I", ALPHA_ABC, ["ABC"])
        with self.assertRaises(ValueError):
            Plugboard.from_letters("I", ALPHA_ABC, ["A1"])

    def test_clone_is_independent(self):
        copy = self.board.clone()
        copy.reset()
        self.assertEqual(len(self.board.plugs), 2)

    def test_constructor_rejects_bad_shape(self):
        with self.assertRaises(ValueError):
            Plugboard("", 5)
        with self.assertRaises(ValueError):
            Plugboard("p", 0)


if __name__ == "__main__":
    unittest.main()
