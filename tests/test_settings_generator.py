"""Tests for the daily settings generator."""
import json
import os
import sys
import tempfile
import unittest
from random import Random

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import settings_generator
from main import MachineContext
from models import MODELS, find_model


class TestGenerateSettings(unittest.TestCase):
    def test_seeded_runs_repeat(self):
        one = settings_generator.generate_settings("I", Random(42))
        two = settings_generator.generate_settings("I", Random(42))
        self.assertEqual(one, two)

    def test_shape(self):
        cfg = settings_generator.generate_settings("I", Random(3))
        self.assertEqual(len(cfg["wheels"]), 3)
        self.assertEqual(len(set(cfg["wheels"])), 3)
        self.assertEqual(len(cfg["key"]), 3)
        self.assertTrue(all(1 <= r <= 26 for r in cfg["ring_set"]))
        self.assertEqual(len(cfg["plugs"]), 10)
        letters = "".join(cfg["plugs"])
        self.assertEqual(len(set(letters)), len(letters))
        self.assertNotIn("reflector_position", cfg)

    def test_pairs_capped(self):
        cfg = settings_generator.generate_settings("I", Random(1), max_pairs=40)
        self.assertEqual(len(cfg["plugs"]), 13)

    def test_thin_wheel_goes_leftmost(self):
        cfg = settings_generator.generate_settings("M4", Random(5))
        self.assertEqual(len(cfg["wheels"]), 4)
        self.assertIn(cfg["wheels"][0], ("Beta", "Gamma"))

    def test_models_without_plugboard(self):
        cfg = settings_generator.generate_settings("D", Random(9))
        self.assertEqual(cfg["plugs"], [])
        self.assertIn("reflector_position", cfg)

    def test_every_model_yields_usable_settings(self):
        for key in MODELS:
            with self.subTest(model=key):
                cfg = settings_generator.generate_settings(key, Random(11))
                ctx = MachineContext(cfg)
                self.assertEqual(ctx.problems, [])
                self.assertEqual(len(ctx.machine.wheels), find_model(key).wheel_count)

    def test_unknown_model(self):
        with self.assertRaises(ValueError):
            settings_generator.generate_settings("Purple", Random(0))


class TestCommandLine(unittest.TestCase):
    def test_writes_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "day.json")
            settings_generator.main(["--model", "M3", "--seed", "7", "--outfile", path])
            with open(path, encoding="utf-8") as fh:
                cfg = json.load(fh)
        self.assertEqual(cfg["model"], "M3")
        self.assertEqual(cfg, settings_generator.generate_settings("M3", Random(7)))

    def test_unknown_model_exits(self):
        with self.assertRaises(SystemExit):
            settings_generator.main(["--model", "Purple", "--outfile", os.devnull])


if __name__ == "__main__":
    unittest.main()
