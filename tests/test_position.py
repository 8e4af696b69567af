import unittest

import numpy as np

from posemapper.core.constants import Joint, PlayerJoint
from posemapper.core.poses import facing_position, standing_player
from posemapper.core.position import (
    Player,
    Position,
    PositionInSequence,
    Sequence,
    basically_same,
    pose_distance_squared,
    between,
    end,
    translated,
)


class PositionTests(unittest.TestCase):
    def test_rejects_wrong_shape(self):
        with self.assertRaises(ValueError):
            Position(np.zeros((2, 22, 3)))
        with self.assertRaises(ValueError):
            Player(np.zeros((23, 2)))

    def test_get_and_set_by_player_joint(self):
        position = Position.zeros()
        key = PlayerJoint(1, Joint.LeftElbow)
        position.set(key, (1.0, 2.0, 3.0))
        np.testing.assert_array_equal(position.get(key), np.array([1.0, 2.0, 3.0]))
        np.testing.assert_array_equal(
            position.get(PlayerJoint(0, Joint.LeftElbow)), np.zeros(3)
        )

    def test_get_returns_a_copy(self):
        position = facing_position()
        key = PlayerJoint(0, Joint.Head)
        point = position.get(key)
        point[0] = 42.0
        self.assertNotEqual(position.get(key)[0], 42.0)

    def test_player_extraction_is_independent(self):
        position = facing_position()
        player = position.player(1)
        player.set(Joint.Core, (9.0, 9.0, 9.0))
        self.assertFalse(np.allclose(position.get(PlayerJoint(1, Joint.Core)), 9.0))
        position.set_player(0, player)
        np.testing.assert_array_equal(
            position.get(PlayerJoint(0, Joint.Core)), np.array([9.0, 9.0, 9.0])
        )

    def test_from_players(self):
        first = standing_player()
        second = first.copy()
        second.set(Joint.Head, (0.0, 2.0, 0.0))
        position = Position.from_players(first, second)
        np.testing.assert_array_equal(position.coords[0], first.coords)
        np.testing.assert_array_equal(
            position.get(PlayerJoint(1, Joint.Head)), np.array([0.0, 2.0, 0.0])
        )

    def test_translated_and_between(self):
        position = facing_position()
        offset = np.array([0.5, 0.0, -0.25])
        moved = translated(position, offset)
        np.testing.assert_allclose(moved.coords - position.coords, np.broadcast_to(offset, position.coords.shape))
        halfway = between(position, moved)
        np.testing.assert_allclose(halfway.coords, position.coords + offset / 2)
        np.testing.assert_allclose(between(position, moved, 0.0).coords, position.coords)
        np.testing.assert_allclose(between(position, moved, 1.0).coords, moved.coords)

    def test_basically_same_threshold(self):
        position = facing_position()
        nudged = position.copy()
        nudged.set(PlayerJoint(0, Joint.Head), position.get(PlayerJoint(0, Joint.Head)) + (0.1, 0.0, 0.0))
        self.assertTrue(basically_same(position, nudged))
        moved = position.copy()
        moved.set(PlayerJoint(0, Joint.Head), position.get(PlayerJoint(0, Joint.Head)) + (0.2, 0.0, 0.0))
        self.assertFalse(basically_same(position, moved))
        self.assertTrue(basically_same(position, moved, epsilon=0.05))
        self.assertAlmostEqual(pose_distance_squared(position, moved), 0.04)
        self.assertEqual(pose_distance_squared(translated(position, (0.0, 0.0, 0.0)), position), 0.0)


class SequenceTests(unittest.TestCase):
    def test_needs_two_positions(self):
        with self.assertRaises(ValueError):
            Sequence("single", [facing_position()])
        seq = Sequence("pair", [facing_position(), facing_position(1.5)])
        self.assertEqual(end(seq), 2)

    def test_position_in_sequence(self):
        pis = PositionInSequence(3, 1)
        self.assertEqual(str(pis), "{3, 1}")
        self.assertEqual(pis, PositionInSequence(3, 1))


if __name__ == "__main__":
    unittest.main()
