from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from posemapper.core.constants import BASICALLY_SAME_EPSILON


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    token: str = "change-me"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


class SolverConfig(BaseModel):
    # Sweeps stop early once every segment is within `tolerance` meters.
    max_iterations: int = 1000
    tolerance: float = 0.001
    stiffness: float = 1.0
    floor_clamp: bool = False

    @field_validator("max_iterations")
    @classmethod
    def _validate_max_iterations(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_iterations must be at least 1")
        return value

    @field_validator("tolerance")
    @classmethod
    def _validate_tolerance(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError("tolerance must be positive")
        return value

    @field_validator("stiffness")
    @classmethod
    def _validate_stiffness(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("stiffness must be in (0, 1]")
        return value


class EquivalenceConfig(BaseModel):
    epsilon: float = BASICALLY_SAME_EPSILON
    allow_swap: bool = True
    allow_mirror: bool = True
    allow_tilt: bool = True

    @field_validator("epsilon")
    @classmethod
    def _validate_epsilon(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError("epsilon must be positive")
        return value


class AppConfig(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    solver: SolverConfig = Field(default_factory=SolverConfig)
    equivalence: EquivalenceConfig = Field(default_factory=EquivalenceConfig)

    def maybe_masked_dump(self, mask_token: bool = True) -> dict:
        data = self.model_dump()
        if mask_token:
            token = data["server"].get("token", "")
            if token:
                data["server"]["token"] = "*" * max(4, len(token))
        return data


class ConfigUpdate(BaseModel):
    # Only fields the client sets are merged; unset ones keep their stored values.
    server: Optional[ServerConfig] = None
    logging: Optional[LoggingConfig] = None
    solver: Optional[SolverConfig] = None
    equivalence: Optional[EquivalenceConfig] = None
