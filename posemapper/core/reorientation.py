from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from posemapper.core import geometry
from posemapper.core.constants import PlayerJoint, opponent
from posemapper.core.geometry import Reorientation
from posemapper.core.position import Position


@dataclass(eq=False)
class PositionReorientation:
    """A rigid transform of the scene, optionally exchanging the two players."""

    reorientation: Reorientation = field(default_factory=Reorientation.identity)
    swap_players: bool = False

    @classmethod
    def identity(cls) -> "PositionReorientation":
        return cls(Reorientation.identity(), False)

    @classmethod
    def swap(cls) -> "PositionReorientation":
        return cls(Reorientation.identity(), True)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PositionReorientation):
            return NotImplemented
        return self.reorientation == other.reorientation and self.swap_players == other.swap_players

    def to_dict(self) -> dict:
        return {
            "rotation": self.reorientation.rotation.tolist(),
            "translation": self.reorientation.translation.tolist(),
            "mirrored": self.reorientation.mirrored,
            "swap_players": bool(self.swap_players),
        }


def apply_point(r: PositionReorientation, xyz) -> np.ndarray:
    return geometry.apply_point(r.reorientation, xyz)


def apply(r: PositionReorientation, position: Position) -> Position:
    coords = geometry.apply_point(r.reorientation, position.coords)
    if r.swap_players:
        coords = coords[::-1].copy()
    return Position(coords)


def apply_joint(r: PositionReorientation, position: Position, player_joint: PlayerJoint) -> np.ndarray:
    """The point `apply(r, position)` would hold at `player_joint`, without building it."""
    if r.swap_players:
        player_joint = PlayerJoint(opponent(player_joint.player), player_joint.joint)
    return geometry.apply_point(r.reorientation, position.get(player_joint))


def inverse(r: PositionReorientation) -> PositionReorientation:
    return PositionReorientation(geometry.inverse(r.reorientation), r.swap_players)


def compose(a: PositionReorientation, b: PositionReorientation) -> PositionReorientation:
    """`a` followed by `b`; two swaps cancel."""
    return PositionReorientation(
        geometry.compose(a.reorientation, b.reorientation),
        a.swap_players != b.swap_players,
    )


def isclose(a: PositionReorientation, b: PositionReorientation, atol: float = 1e-9) -> bool:
    return a.swap_players == b.swap_players and geometry.isclose(
        a.reorientation, b.reorientation, atol=atol
    )
