"""Tests for permutation and defects: bijection checks and rotation."""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from alphabet import ALPHA_ABC
from defects import (
    Defect,
    DefectKind,
    find_duplicates,
    find_out_of_ranges,
    find_tuple_duplicates,
)
from permutation import Permutation, Rotation

ROTOR_I = "EKMFLGDQVZNTOWYHXUSPAIBRCJ"
UKW_B = "YRUHQSLDPXNGOKMIEBFZCWVJAT"


class TestFinders(unittest.TestCase):
    def test_out_of_ranges(self):
        self.assertEqual(find_out_of_ranges([0, 5, -1, 2], 3), [(1, 5), (2, -1)])

    def test_duplicates_skip_first_occurrence(self):
        self.assertEqual(find_duplicates([3, 1, 3, 0]), [(2, 3)])
        self.assertEqual(find_duplicates([1, 1, 1]), [(1, 1), (2, 1)])
        self.assertEqual(find_duplicates([0, 1, 2]), [])

    def test_tuple_duplicates_span_pairs(self):
        self.assertEqual(find_tuple_duplicates([(0, 1), (2, 1), (0, 3)]), [(1, 1), (2, 0)])
        self.assertEqual(find_tuple_duplicates([(4, 4)]), [])


class TestPermutationConstruction(unittest.TestCase):
    def test_rejects_empty_label(self):
        with self.assertRaises(ValueError):
            Permutation("", 3, [0, 1, 2])

    def test_rejects_non_positive_size(self):
        with self.assertRaises(ValueError):
            Permutation("P", 0, [])
        with self.assertRaises(ValueError):
            Permutation("P", -1, [])

    def test_rejects_wrong_length(self):
        with self.assertRaises(ValueError):
            Permutation("P", 3, [0, 1])
        with self.assertRaises(ValueError):
            Permutation("P", 3, None)

    def test_broken_wiring_is_constructible(self):
        perm = Permutation("P", 3, [0, 0, 7])
        self.assertEqual(perm.wiring, (0, 0, 7))

    def test_from_alphabets(self):
        perm = Permutation.from_alphabets("I", ALPHA_ABC, ROTOR_I)
        self.assertEqual(perm.size, 26)
        self.assertEqual(perm.encode(0), 4)


class TestPermutationEncode(unittest.TestCase):
    def setUp(self):
        self.perm = Permutation.from_alphabets("I", ALPHA_ABC, ROTOR_I)

    def test_encode_in_range(self):
        self.assertEqual(self.perm.encode(1), ALPHA_ABC.index("K"))

    def test_encode_wraps(self):
        self.assertEqual(self.perm.encode(26), self.perm.encode(0))
        self.assertEqual(self.perm.encode(-1), ALPHA_ABC.index("J"))

    def test_decode_inverts_encode(self):
        for i in range(26):
            self.assertEqual(self.perm.decode(self.perm.encode(i)), i)

    def test_decode_refuses_non_bijection(self):
        with self.assertRaises(ValueError):
            Permutation("P", 3, [0, 0, 1]).decode(1)

    def test_involution(self):
        self.assertTrue(Permutation.from_alphabets("B", ALPHA_ABC, UKW_B).is_involution())
        self.assertFalse(self.perm.is_involution())
        self.assertTrue(Permutation.identity("E", 5).is_involution())


class TestPermutationValidate(unittest.TestCase):
    def test_valid_bijection_has_no_defects(self):
        self.assertEqual(Permutation("P", 4, [2, 0, 3, 1]).validate(), [])
        self.assertEqual(Permutation.from_alphabets("I", ALPHA_ABC, ROTOR_I).validate(), [])

    def test_duplicate_reported_at_later_position(self):
        defects = Permutation("P", 4, [2, 0, 2, 1]).validate()
        self.assertEqual(len(defects), 1)
        self.assertEqual(defects[0].kind, DefectKind.DUPLICATE)
        self.assertEqual(defects[0].index, 2)
        self.assertEqual(defects[0].value, 2)

    def test_out_of_range(self):
        defects = Permutation("P", 3, [0, 1, 9]).validate("wheel")
        self.assertEqual([d.kind for d in defects], [DefectKind.OUT_OF_RANGE])
        self.assertEqual(defects[0].component, "wheel")
        self.assertIn("wiring[2]", str(defects[0]))

    def test_defect_tagging(self):
        d = Defect("wheel", DefectKind.DUPLICATE, "boom", index=1)
        tagged = d.tagged("Machine 'X' wheel[2]", wheel=2)
        self.assertEqual(tagged.message, "Machine 'X' wheel[2]: boom")
        self.assertEqual(tagged.wheel, 2)
        self.assertEqual(tagged.index, 1)


class TestRotation(unittest.TestCase):
    def test_setter_wraps(self):
        rot = Rotation(26)
        rot.position = 27
        self.assertEqual(rot.position, 1)
        rot.position = -1
        self.assertEqual(rot.position, 25)

    def test_advance_returns_new_position(self):
        rot = Rotation(26, 25)
        self.assertEqual(rot.advance(), 0)
        self.assertEqual(rot.advance(3), 3)

    def test_additive(self):
        for a, b in ((1, 1), (5, 30), (-3, 7), (25, 25)):
            one, two = Rotation(26, 4), Rotation(26, 4)
            one.advance(a)
            one.advance(b)
            two.advance(a + b)
            self.assertEqual(one.position, two.position)

    def test_rejects_bad_size(self):
        with self.assertRaises(ValueError):
            Rotation(0)


if __name__ == "__main__":
    unittest.main()
