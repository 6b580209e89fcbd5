"""Tests for alphabet: index mapping and circular wrap."""
import math
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from alphabet import (
    ALPHA_ABC,
    ALPHA_QWERTZ,
    check_alphabet,
    circular,
    derive_permutation,
    index_of,
    indices_to_symbols,
    symbol_of,
)


class TestCircular(unittest.TestCase):
    def test_in_range_unchanged(self):
        self.assertEqual(circular(3, 26), 3)

    def test_wraps_positive_and_negative(self):
        self.assertEqual(circular(26, 26), 0)
        self.assertEqual(circular(27, 26), 1)
        self.assertEqual(circular(-1, 26), 25)
        self.assertEqual(circular(-27, 26), 25)

    def test_always_in_range(self):
        for size in (1, 2, 5, 26, 60):
            for v in range(-200, 200, 7):
                self.assertTrue(0 <= circular(v, size) < size)

    def test_periodic(self):
        for k in (-3, -1, 0, 1, 4):
            self.assertEqual(circular(5, 7), circular(5 + k * 7, 7))

    def test_rejects_bad_size(self):
        for bad in (0, -1, math.inf, math.nan):
            with self.assertRaises(ValueError):
                circular(1, bad)


class TestIndexMapping(unittest.TestCase):
    def test_index_of_known_symbol(self):
        self.assertEqual(index_of("A", ALPHA_ABC), 0)
        self.assertEqual(index_of("W", ALPHA_QWERTZ), 1)

    def test_index_of_normalises(self):
        self.assertEqual(index_of("c", ALPHA_ABC), 2)
        self.assertEqual(index_of(" dog", ALPHA_ABC), 3)

    def test_index_of_unknown_uses_fallback(self):
        self.assertEqual(index_of("5", ALPHA_ABC), ALPHA_ABC.index("X"))
        self.assertEqual(index_of("?", ALPHA_ABC, "Q"), 16)
        self.assertEqual(index_of("", ALPHA_ABC), 23)

    def test_index_of_missing_fallback_raises(self):
        with self.assertRaises(ValueError):
            index_of("?", "0123456789", "X")

    def test_symbol_of(self):
        self.assertEqual(symbol_of(25, ALPHA_ABC), "Z")
        self.assertEqual(symbol_of(26, ALPHA_ABC), "X")
        self.assertEqual(symbol_of(-1, ALPHA_ABC, "?"), "?")

    def test_derive_permutation(self):
        wiring = derive_permutation(ALPHA_ABC, "EKMFLGDQVZNTOWYHXUSPAIBRCJ")
        self.assertEqual(wiring[:4], [4, 10, 12, 5])
        self.assertEqual(sorted(wiring), list(range(26)))
        self.assertEqual(indices_to_symbols(wiring[:4]), "EKMF")

    def test_derive_permutation_length_mismatch(self):
        with self.assertRaises(ValueError):
            derive_permutation(ALPHA_ABC, "ABC")

    def test_check_alphabet(self):
        self.assertEqual(check_alphabet("ABC"), "ABC")
        with self.assertRaises(ValueError):
            check_alphabet("")
        with self.assertRaises(ValueError):
            check_alphabet("ABCA")


if __name__ == "__main__":
    unittest.main()
