import math
import unittest

import numpy as np

from posemapper.core.constants import PLAYER_JOINTS, Joint, PlayerJoint
from posemapper.core.geometry import (
    Reorientation,
    apply_point as apply_spatial,
    compose as compose_spatial,
    distance_squared,
    is_rigid,
    yaw_matrix,
)
from posemapper.core.poses import facing_position
from posemapper.core.reorientation import (
    PositionReorientation,
    apply,
    apply_joint,
    apply_point,
    compose,
    inverse,
    isclose,
)


def _tilt_matrix(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def _reorientation(yaw, tilt=0.0, translation=(0.0, 0.0, 0.0), mirror=False, swap=False):
    rotation = _tilt_matrix(tilt) @ yaw_matrix(yaw)
    if mirror:
        rotation = rotation @ np.diag([-1.0, 1.0, 1.0])
    return PositionReorientation(Reorientation(rotation, translation), swap)


class ReorientationAlgebraTests(unittest.TestCase):
    def setUp(self):
        self.position = facing_position()
        self.samples = [
            _reorientation(0.7, translation=(0.3, 0.0, -1.1)),
            _reorientation(-2.1, tilt=0.4, translation=(0.0, 0.2, 0.5), swap=True),
            _reorientation(1.3, translation=(-0.8, 0.0, 0.1), mirror=True),
            _reorientation(0.2, tilt=-0.3, translation=(1.0, 1.0, 1.0), mirror=True, swap=True),
        ]

    def test_identity_is_named_default(self):
        self.assertEqual(PositionReorientation.identity(), PositionReorientation())
        moved = apply(PositionReorientation.identity(), self.position)
        np.testing.assert_array_equal(moved.coords, self.position.coords)

    def test_apply_point(self):
        r = PositionReorientation(Reorientation.from_yaw(math.pi / 2, (1.0, 2.0, 3.0)))
        np.testing.assert_allclose(apply_point(r, (1.0, 0.0, 0.0)), [1.0, 2.0, 2.0], atol=1e-12)

    def test_apply_moves_every_joint(self):
        r = self.samples[0]
        moved = apply(r, self.position)
        for pj in PLAYER_JOINTS:
            np.testing.assert_allclose(
                moved.get(pj), apply_spatial(r.reorientation, self.position.get(pj)), atol=1e-12
            )

    def test_apply_with_swap_exchanges_players(self):
        r = self.samples[1]
        moved = apply(r, self.position)
        for pj in PLAYER_JOINTS:
            source = PlayerJoint(1 - pj.player, pj.joint)
            np.testing.assert_allclose(
                moved.get(pj), apply_spatial(r.reorientation, self.position.get(source)), atol=1e-12
            )

    def test_apply_joint_matches_full_apply(self):
        for r in self.samples:
            moved = apply(r, self.position)
            for pj in (PlayerJoint(0, Joint.Head), PlayerJoint(1, Joint.RightFingers)):
                np.testing.assert_allclose(apply_joint(r, self.position, pj), moved.get(pj), atol=1e-12)

    def test_round_trip_through_inverse(self):
        for r in self.samples:
            back = apply(inverse(r), apply(r, self.position))
            np.testing.assert_allclose(back.coords, self.position.coords, atol=1e-9)

    def test_inverse_keeps_swap_flag(self):
        for r in self.samples:
            self.assertEqual(inverse(r).swap_players, r.swap_players)

    def test_compose_applies_first_then_second(self):
        a, b = self.samples[0], self.samples[1]
        composed = apply(compose(a, b), self.position)
        stepwise = apply(b, apply(a, self.position))
        np.testing.assert_allclose(composed.coords, stepwise.coords, atol=1e-9)

    def test_compose_swap_is_xor(self):
        plain = PositionReorientation.identity()
        swap = PositionReorientation.swap()
        self.assertFalse(compose(plain, plain).swap_players)
        self.assertTrue(compose(plain, swap).swap_players)
        self.assertTrue(compose(swap, plain).swap_players)
        self.assertFalse(compose(swap, swap).swap_players)

    def test_compose_is_associative(self):
        a, b, c = self.samples[:3]
        self.assertTrue(isclose(compose(a, compose(b, c)), compose(compose(a, b), c)))

    def test_identity_is_neutral(self):
        identity = PositionReorientation.identity()
        for r in self.samples:
            self.assertEqual(compose(identity, r), r)
            self.assertEqual(compose(r, identity), r)

    def test_compose_with_inverse_gives_identity(self):
        for r in self.samples:
            self.assertTrue(isclose(compose(r, inverse(r)), PositionReorientation.identity()))

    def test_swap_twice_is_exact_identity(self):
        swap = PositionReorientation.swap()
        twice = apply(swap, apply(swap, self.position))
        np.testing.assert_array_equal(twice.coords, self.position.coords)

    def test_equality_is_exact(self):
        r = self.samples[0]
        same = PositionReorientation(
            Reorientation(r.reorientation.rotation.copy(), r.reorientation.translation.copy()),
            r.swap_players,
        )
        self.assertEqual(r, same)
        self.assertNotEqual(r, PositionReorientation(r.reorientation, not r.swap_players))
        nudged = PositionReorientation(
            Reorientation(r.reorientation.rotation, r.reorientation.translation + 1e-12),
            r.swap_players,
        )
        self.assertNotEqual(r, nudged)
        self.assertTrue(isclose(r, nudged))

    def test_mirror_flag(self):
        self.assertFalse(self.samples[0].reorientation.mirrored)
        self.assertTrue(self.samples[2].reorientation.mirrored)
        self.assertTrue(compose_spatial(Reorientation.mirror_x(), Reorientation.identity()).mirrored)
        self.assertFalse(compose_spatial(Reorientation.mirror_x(), Reorientation.mirror_x()).mirrored)


class GeometryHelperTests(unittest.TestCase):
    def test_distance_squared(self):
        self.assertEqual(distance_squared((0.0, 0.0, 0.0), (1.0, 2.0, 2.0)), 9.0)
        self.assertEqual(distance_squared((0.5, -1.0, 3.0), (0.5, -1.0, 3.0)), 0.0)

    def test_is_rigid(self):
        self.assertTrue(is_rigid(np.eye(3)))
        self.assertTrue(is_rigid(_tilt_matrix(0.4) @ yaw_matrix(-1.2)))
        self.assertTrue(is_rigid(np.diag([-1.0, 1.0, 1.0])))
        self.assertFalse(is_rigid(np.diag([2.0, 1.0, 1.0])))
        self.assertFalse(is_rigid([[1.0, 0.5, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]))
        self.assertFalse(is_rigid(np.eye(2)))


if __name__ == "__main__":
    unittest.main()
