from __future__ import annotations

from typing import Dict, Tuple

import numpy as np

from posemapper.core.constants import Joint
from posemapper.core.geometry import Reorientation, apply_point
from posemapper.core.position import Player, Position

# Roughly anatomical standing pose, y up, facing +z, left side at +x.
# Close to the segment rest lengths but not exactly on them.
_STANDING: Dict[Joint, Tuple[float, float, float]] = {
    Joint.LeftToe: (0.11, 0.02, 0.17),
    Joint.LeftHeel: (0.11, 0.03, -0.05),
    Joint.LeftAnkle: (0.11, 0.07, 0.0),
    Joint.LeftKnee: (0.11, 0.49, 0.02),
    Joint.LeftHip: (0.11, 0.93, 0.0),
    Joint.LeftShoulder: (0.17, 1.5, 0.0),
    Joint.LeftElbow: (0.2, 1.22, 0.02),
    Joint.LeftWrist: (0.22, 0.96, 0.05),
    Joint.LeftHand: (0.225, 0.88, 0.06),
    Joint.LeftFingers: (0.23, 0.82, 0.08),
    Joint.Core: (0.0, 1.15, 0.0),
    Joint.Neck: (0.0, 1.535, 0.0),
    Joint.Head: (0.0, 1.7, 0.0),
}

_MIRRORED = {
    Joint.LeftToe: Joint.RightToe,
    Joint.LeftHeel: Joint.RightHeel,
    Joint.LeftAnkle: Joint.RightAnkle,
    Joint.LeftKnee: Joint.RightKnee,
    Joint.LeftHip: Joint.RightHip,
    Joint.LeftShoulder: Joint.RightShoulder,
    Joint.LeftElbow: Joint.RightElbow,
    Joint.LeftWrist: Joint.RightWrist,
    Joint.LeftHand: Joint.RightHand,
    Joint.LeftFingers: Joint.RightFingers,
}


def standing_player() -> Player:
    player = Player.zeros()
    for joint, (x, y, z) in _STANDING.items():
        player.set(joint, (x, y, z))
        if joint in _MIRRORED:
            player.set(_MIRRORED[joint], (-x, y, z))
    return player


def reaching_player() -> Player:
    """Standing, right arm raised forward."""
    player = standing_player()
    player.set(Joint.RightElbow, (-0.19, 1.45, 0.29))
    player.set(Joint.RightWrist, (-0.2, 1.42, 0.56))
    player.set(Joint.RightHand, (-0.2, 1.41, 0.64))
    player.set(Joint.RightFingers, (-0.2, 1.4, 0.7))
    return player


def facing_position(distance: float = 1.2) -> Position:
    """Player 0 standing at the origin, player 1 reaching toward them from `distance` along +z."""
    second = reaching_player()
    turn = Reorientation.from_yaw(np.pi, (0.0, 0.0, distance))
    second.coords = apply_point(turn, second.coords)
    return Position.from_players(standing_player(), second)
