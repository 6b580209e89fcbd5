"""Tests for the stepping policies."""
import os
import sys
import unittest
from dataclasses import dataclass

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from stepping import (
    DEFAULT_POLICY,
    POLICIES,
    cog_stepping,
    lever_stepping,
    notch_stepping,
    resolve_policy,
)


@dataclass
class Stub:
    at_notch: bool = False
    thin: bool = False


def chain(*notches, thin=()):
    return [Stub(n, i in thin) for i, n in enumerate(notches)]


class TestNotchStepping(unittest.TestCase):
    def test_only_lead_wheel_without_notches(self):
        self.assertEqual(notch_stepping(chain(False, False, False)), [True, False, False])

    def test_wheel_steps_on_its_own_notch(self):
        self.assertEqual(notch_stepping(chain(True, False, False)), [True, False, False])
        self.assertEqual(notch_stepping(chain(False, True, False)), [True, True, False])
        self.assertEqual(notch_stepping(chain(False, True, True)), [True, True, True])

    def test_empty_chain(self):
        self.assertEqual(notch_stepping([]), [])


class TestLeverStepping(unittest.TestCase):
    def test_carry_from_right_wheel(self):
        self.assertEqual(lever_stepping(chain(True, False, False)), [True, True, False])

    def test_double_step(self):
        self.assertEqual(lever_stepping(chain(False, True, False)), [True, True, True])

    def test_thin_wheel_stays(self):
        steps = lever_stepping(chain(False, True, False, True, thin=(3,)))
        self.assertEqual(steps, [True, True, True, False])


class TestCogStepping(unittest.TestCase):
    def test_odometer(self):
        self.assertEqual(cog_stepping(chain(False, True, True)), [True, False, False])
        self.assertEqual(cog_stepping(chain(True, False, True)), [True, True, False])
        self.assertEqual(cog_stepping(chain(True, True, True)), [True, True, True])


class TestResolvePolicy(unittest.TestCase):
    def test_names_and_default(self):
        self.assertIs(resolve_policy(None), POLICIES[DEFAULT_POLICY])
        self.assertIs(resolve_policy("lever"), lever_stepping)

    def test_callable_passes_through(self):
        policy = lambda wheels: [True] * len(wheels)  # noqa: E731
        self.assertIs(resolve_policy(policy), policy)

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            resolve_policy("gear")


if __name__ == "__main__":
    unittest.main()
