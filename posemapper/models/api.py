from typing import List, Optional

from pydantic import BaseModel, field_validator

from posemapper.core.constants import PLAYERS, Joint

Coordinates = List[List[List[float]]]


class PlayerJointModel(BaseModel):
    player: int
    joint: str

    @field_validator("player")
    @classmethod
    def _validate_player(cls, value: int) -> int:
        if value not in PLAYERS:
            raise ValueError("player must be 0 or 1")
        return value

    @field_validator("joint")
    @classmethod
    def _validate_joint(cls, value: str) -> str:
        if value not in Joint.__members__:
            raise ValueError(f"unknown joint: {value}")
        return value


class ReorientationModel(BaseModel):
    rotation: List[List[float]]
    translation: List[float]
    mirrored: bool = False
    swap_players: bool = False


class SpringRequest(BaseModel):
    position: Coordinates
    fixed: Optional[PlayerJointModel] = None


class SpringResponse(BaseModel):
    position: Coordinates
    iterations: int
    max_error: float


class ReorientedRequest(BaseModel):
    reference: Coordinates
    candidate: Coordinates


class ReorientedResponse(BaseModel):
    found: bool
    reorientation: Optional[ReorientationModel] = None


class ApplyRequest(BaseModel):
    position: Coordinates
    reorientation: ReorientationModel
