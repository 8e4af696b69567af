from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from posemapper.core.constants import (
    BASICALLY_SAME_EPSILON,
    JOINT_COUNT,
    PLAYER_COUNT,
    Joint,
    PlayerJoint,
)
from posemapper.core.geometry import distance_squared


def _coords(values, shape: tuple[int, ...], name: str) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    if arr.shape != shape:
        raise ValueError(f"{name} expects coordinates shaped {shape}, got {arr.shape}")
    return arr


@dataclass(eq=False)
class Player:
    """One body: a 3D point for every joint, indexed by Joint ordinal."""

    coords: np.ndarray

    def __post_init__(self) -> None:
        self.coords = _coords(self.coords, (JOINT_COUNT, 3), "Player")

    @classmethod
    def zeros(cls) -> "Player":
        return cls(np.zeros((JOINT_COUNT, 3)))

    def get(self, joint: Joint) -> np.ndarray:
        return self.coords[int(joint)].copy()

    def set(self, joint: Joint, xyz) -> None:
        self.coords[int(joint)] = np.asarray(xyz, dtype=np.float64).reshape(3)

    def copy(self) -> "Player":
        return Player(self.coords.copy())


@dataclass(eq=False)
class Position:
    """Both bodies at one instant; always holds all 2 x 23 joints."""

    coords: np.ndarray

    def __post_init__(self) -> None:
        self.coords = _coords(self.coords, (PLAYER_COUNT, JOINT_COUNT, 3), "Position")

    @classmethod
    def zeros(cls) -> "Position":
        return cls(np.zeros((PLAYER_COUNT, JOINT_COUNT, 3)))

    @classmethod
    def from_players(cls, first: Player, second: Player) -> "Position":
        return cls(np.stack([first.coords, second.coords]))

    def get(self, player_joint: PlayerJoint) -> np.ndarray:
        return self.coords[player_joint.player, int(player_joint.joint)].copy()

    def set(self, player_joint: PlayerJoint, xyz) -> None:
        self.coords[player_joint.player, int(player_joint.joint)] = np.asarray(
            xyz, dtype=np.float64
        ).reshape(3)

    def player(self, player: int) -> Player:
        return Player(self.coords[player].copy())

    def set_player(self, player: int, value: Player) -> None:
        self.coords[player] = value.coords

    def copy(self) -> "Position":
        return Position(self.coords.copy())

    def to_list(self) -> list:
        return self.coords.tolist()


def translated(position: Position, offset) -> Position:
    return Position(position.coords + np.asarray(offset, dtype=np.float64).reshape(3))


def between(a: Position, b: Position, s: float = 0.5) -> Position:
    """Per-joint linear interpolation; s=0 gives `a`, s=1 gives `b`."""
    return Position(a.coords + (b.coords - a.coords) * float(s))


def pose_distance_squared(a: Position, b: Position) -> float:
    return distance_squared(a.coords.ravel(), b.coords.ravel())


def basically_same(a: Position, b: Position, epsilon: float = BASICALLY_SAME_EPSILON) -> bool:
    return pose_distance_squared(a, b) < epsilon


@dataclass
class Sequence:
    description: str
    positions: List[Position]

    def __post_init__(self) -> None:
        if len(self.positions) < 2:
            raise ValueError("a sequence needs at least two positions")


def end(sequence: Sequence) -> int:
    return len(sequence.positions)


@dataclass(frozen=True)
class PositionInSequence:
    sequence: int
    position: int

    def __str__(self) -> str:
        return f"{{{self.sequence}, {self.position}}}"
