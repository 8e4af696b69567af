from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Tuple


class Joint(IntEnum):
    LeftToe = 0
    RightToe = 1
    LeftHeel = 2
    RightHeel = 3
    LeftAnkle = 4
    RightAnkle = 5
    LeftKnee = 6
    RightKnee = 7
    LeftHip = 8
    RightHip = 9
    LeftShoulder = 10
    RightShoulder = 11
    LeftElbow = 12
    RightElbow = 13
    LeftWrist = 14
    RightWrist = 15
    LeftHand = 16
    RightHand = 17
    LeftFingers = 18
    RightFingers = 19
    Core = 20
    Neck = 21
    Head = 22


JOINTS: Tuple[Joint, ...] = tuple(Joint)
JOINT_COUNT = len(JOINTS)

PLAYERS: Tuple[int, ...] = (0, 1)
PLAYER_COUNT = len(PLAYERS)


def opponent(player: int) -> int:
    return 1 - player


class PlayerJoint(NamedTuple):
    player: int
    joint: Joint


# Player-major: all of player 0, then all of player 1.
PLAYER_JOINTS: Tuple[PlayerJoint, ...] = tuple(
    PlayerJoint(player, joint) for player in PLAYERS for joint in JOINTS
)


@dataclass(frozen=True)
class JointDef:
    joint: Joint
    radius: float
    draggable: bool


@dataclass(frozen=True)
class PlayerDef:
    color: Tuple[float, float, float]


@dataclass(frozen=True)
class Segment:
    ends: Tuple[Joint, Joint]
    length: float  # rest length, meters
    midpoint_radius: float  # meters, rendering only
    visible: bool


# Indexed by Joint ordinal.
JOINT_DEFS: Tuple[JointDef, ...] = (
    JointDef(Joint.LeftToe, 0.025, False),
    JointDef(Joint.RightToe, 0.025, False),
    JointDef(Joint.LeftHeel, 0.03, False),
    JointDef(Joint.RightHeel, 0.03, False),
    JointDef(Joint.LeftAnkle, 0.03, True),
    JointDef(Joint.RightAnkle, 0.03, True),
    JointDef(Joint.LeftKnee, 0.05, True),
    JointDef(Joint.RightKnee, 0.05, True),
    JointDef(Joint.LeftHip, 0.09, True),
    JointDef(Joint.RightHip, 0.09, True),
    JointDef(Joint.LeftShoulder, 0.08, True),
    JointDef(Joint.RightShoulder, 0.08, True),
    JointDef(Joint.LeftElbow, 0.045, True),
    JointDef(Joint.RightElbow, 0.045, True),
    JointDef(Joint.LeftWrist, 0.02, False),
    JointDef(Joint.RightWrist, 0.02, False),
    JointDef(Joint.LeftHand, 0.02, True),
    JointDef(Joint.RightHand, 0.02, True),
    JointDef(Joint.LeftFingers, 0.02, False),
    JointDef(Joint.RightFingers, 0.02, False),
    JointDef(Joint.Core, 0.1, False),
    JointDef(Joint.Neck, 0.04, False),
    JointDef(Joint.Head, 0.11, True),
)

PLAYER_DEFS: Tuple[PlayerDef, ...] = (
    PlayerDef(color=(1.0, 0.0, 0.0)),
    PlayerDef(color=(0.0, 0.0, 1.0)),
)

# Shared by both players. Order is the solver's processing order.
SEGMENTS: Tuple[Segment, ...] = (
    Segment((Joint.LeftToe, Joint.LeftHeel), 0.23, 0.025, True),
    Segment((Joint.LeftToe, Joint.LeftAnkle), 0.18, 0.025, True),
    Segment((Joint.LeftHeel, Joint.LeftAnkle), 0.09, 0.025, True),
    Segment((Joint.LeftAnkle, Joint.LeftKnee), 0.42, 0.055, True),
    Segment((Joint.LeftKnee, Joint.LeftHip), 0.44, 0.085, True),
    Segment((Joint.LeftHip, Joint.Core), 0.27, 0.1, True),
    Segment((Joint.Core, Joint.LeftShoulder), 0.37, 0.075, True),
    Segment((Joint.LeftShoulder, Joint.LeftElbow), 0.29, 0.06, True),
    Segment((Joint.LeftElbow, Joint.LeftWrist), 0.26, 0.03, True),
    Segment((Joint.LeftWrist, Joint.LeftHand), 0.08, 0.02, True),
    Segment((Joint.LeftHand, Joint.LeftFingers), 0.08, 0.02, True),
    Segment((Joint.LeftWrist, Joint.LeftFingers), 0.14, 0.02, False),
    Segment((Joint.RightToe, Joint.RightHeel), 0.23, 0.025, True),
    Segment((Joint.RightToe, Joint.RightAnkle), 0.18, 0.025, True),
    Segment((Joint.RightHeel, Joint.RightAnkle), 0.09, 0.025, True),
    Segment((Joint.RightAnkle, Joint.RightKnee), 0.42, 0.055, True),
    Segment((Joint.RightKnee, Joint.RightHip), 0.44, 0.085, True),
    Segment((Joint.RightHip, Joint.Core), 0.27, 0.1, True),
    Segment((Joint.Core, Joint.RightShoulder), 0.37, 0.075, True),
    Segment((Joint.RightShoulder, Joint.RightElbow), 0.29, 0.06, True),
    Segment((Joint.RightElbow, Joint.RightWrist), 0.27, 0.03, True),
    Segment((Joint.RightWrist, Joint.RightHand), 0.08, 0.02, True),
    Segment((Joint.RightHand, Joint.RightFingers), 0.08, 0.02, True),
    Segment((Joint.RightWrist, Joint.RightFingers), 0.14, 0.02, False),
    Segment((Joint.LeftShoulder, Joint.RightShoulder), 0.34, 0.1, False),
    Segment((Joint.LeftHip, Joint.RightHip), 0.22, 0.1, False),
    Segment((Joint.LeftShoulder, Joint.Neck), 0.175, 0.065, True),
    Segment((Joint.RightShoulder, Joint.Neck), 0.175, 0.065, True),
    Segment((Joint.Neck, Joint.Head), 0.165, 0.05, True),
)

# Torso landmarks used to hypothesise a rigid transform between two poses.
LANDMARK_JOINTS: Tuple[Joint, ...] = (
    Joint.Core,
    Joint.Neck,
    Joint.Head,
    Joint.LeftHip,
    Joint.RightHip,
    Joint.LeftShoulder,
    Joint.RightShoulder,
)

# Sum over all player joints of squared distance (m^2) below which two
# positions count as the same pose.
BASICALLY_SAME_EPSILON = 0.03
