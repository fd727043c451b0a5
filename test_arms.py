"""Tests for ArmRegistry."""
import unittest

import numpy as np
import pandas as pd

from arms import ArmRegistry
from errors import ConfigurationError


class TestArmRegistry(unittest.TestCase):
    def test_mapping_order_and_pools(self):
        reg = ArmRegistry({"b": [1, 2], "a": (3.0,), "c": np.array([4.0, 5.0, 6.0])})
        self.assertEqual(reg.list_arms(), ("b", "a", "c"))
        self.assertEqual(len(reg), 3)
        self.assertEqual(reg.index("a"), 1)
        np.testing.assert_array_equal(reg.pool("c"), [4.0, 5.0, 6.0])
        self.assertEqual(reg.pool("b").dtype, np.float64)
        self.assertIn("a", reg)
        self.assertNotIn("z", reg)

    def test_pools_are_read_only_copies(self):
        src = [1.0, 2.0]
        reg = ArmRegistry({"x": src})
        src.append(3.0)
        self.assertEqual(reg.pool("x").size, 2)
        with self.assertRaises(ValueError):
            reg.pool("x")[0] = 9.0

    def test_empty_pool_rejected(self):
        with self.assertRaises(ConfigurationError):
            ArmRegistry({"a": [1.0], "b": []})

    def test_no_arms_rejected(self):
        with self.assertRaises(ConfigurationError):
            ArmRegistry({})

    def test_non_numeric_rewards_rejected(self):
        with self.assertRaises(ConfigurationError):
            ArmRegistry({"a": ["high", "low"]})

    def test_sample_reward_draws_from_pool(self):
        reg = ArmRegistry({"a": [1.0, 2.0, 3.0], "b": [10.0]})
        rng = np.random.default_rng(0)
        draws = {reg.sample_reward("a", rng) for _ in range(200)}
        self.assertEqual(draws, {1.0, 2.0, 3.0})
        self.assertEqual(reg.sample_reward("b", rng), 10.0)

    def test_sample_reward_unknown_arm(self):
        reg = ArmRegistry({"a": [1.0]})
        with self.assertRaises(KeyError):
            reg.sample_reward("b", np.random.default_rng(0))

    def test_from_frame_single_column(self):
        df = pd.DataFrame({"Arm": ["C", "A", "C", "B"], "Y": [1.0, 2.0, 3.0, 4.0]})
        reg = ArmRegistry.from_frame(df, "Arm", "Y")
        # first appearance, not sorted
        self.assertEqual(reg.list_arms(), ("C", "A", "B"))
        np.testing.assert_array_equal(reg.pool("C"), [1.0, 3.0])

    def test_from_frame_several_columns_gives_tuples(self):
        df = pd.DataFrame({
            "drug": ["x", "x", "y", "y"],
            "dose": [1, 2, 1, 1],
            "Y": [0.1, 0.2, 0.3, 0.4],
        })
        reg = ArmRegistry.from_frame(df, ["drug", "dose"], "Y")
        self.assertEqual(reg.list_arms(), (("x", 1), ("x", 2), ("y", 1)))
        np.testing.assert_array_equal(reg.pool(("y", 1)), [0.3, 0.4])

    def test_from_frame_one_element_list_gives_scalars(self):
        df = pd.DataFrame({"Arm": ["A", "B", "A"], "Y": [1.0, 2.0, 3.0]})
        reg = ArmRegistry.from_frame(df, ["Arm"], "Y")
        self.assertEqual(reg.list_arms(), ("A", "B"))
        np.testing.assert_array_equal(reg.pool("A"), [1.0, 3.0])

    def test_from_frame_missing_group_value_rejected(self):
        df = pd.DataFrame({"Arm": ["A", None], "Y": [1.0, 2.0]})
        with self.assertRaises(ConfigurationError):
            ArmRegistry.from_frame(df, "Arm", "Y")
        df = pd.DataFrame({"drug": ["x", "y"], "dose": [1.0, np.nan], "Y": [1.0, 2.0]})
        with self.assertRaises(ConfigurationError):
            ArmRegistry.from_frame(df, ["drug", "dose"], "Y")

    def test_from_frame_drops_missing_responses(self):
        df = pd.DataFrame({"Arm": ["A", "A", "B"], "Y": [1.0, np.nan, 2.0]})
        reg = ArmRegistry.from_frame(df, "Arm", "Y")
        np.testing.assert_array_equal(reg.pool("A"), [1.0])

    def test_from_frame_all_missing_arm_rejected(self):
        df = pd.DataFrame({"Arm": ["A", "B", "B"], "Y": [1.0, np.nan, np.nan]})
        with self.assertRaises(ConfigurationError):
            ArmRegistry.from_frame(df, "Arm", "Y")

    def test_from_frame_empty_frame_rejected(self):
        df = pd.DataFrame({"Arm": pd.Series([], dtype=object), "Y": pd.Series([], dtype=float)})
        with self.assertRaises(ConfigurationError):
            ArmRegistry.from_frame(df, "Arm", "Y")

    def test_from_frame_missing_column(self):
        df = pd.DataFrame({"Arm": ["A"], "Y": [1.0]})
        with self.assertRaises(ConfigurationError):
            ArmRegistry.from_frame(df, "Group", "Y")
        with self.assertRaises(ConfigurationError):
            ArmRegistry.from_frame(df, "Arm", "reward")

    def test_from_frame_non_numeric_response(self):
        df = pd.DataFrame({"Arm": ["A", "B"], "Y": ["good", "bad"]})
        with self.assertRaises(ConfigurationError):
            ArmRegistry.from_frame(df, "Arm", "Y")


if __name__ == "__main__":
    unittest.main()
