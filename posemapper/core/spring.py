from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from posemapper.core.constants import JOINT_COUNT, JOINT_DEFS, SEGMENTS, Joint, PlayerJoint
from posemapper.core.position import Player, Position
from posemapper.models.config import SolverConfig

logger = logging.getLogger(__name__)

_SEGMENT_ENDS = np.array([[int(s.ends[0]), int(s.ends[1])] for s in SEGMENTS], dtype=np.intp)
_REST_LENGTHS = np.array([s.length for s in SEGMENTS], dtype=np.float64)
_JOINT_RADII = np.array([d.radius for d in JOINT_DEFS], dtype=np.float64)
_FALLBACK_DIRECTION = np.array([1.0, 0.0, 0.0], dtype=np.float64)
_DEGENERATE_LENGTH = 1e-9


class SpringSolver:
    """Relaxes joint coordinates toward the segment rest lengths.

    Each sweep visits the segments in table order and moves both endpoints
    along the segment so that its length approaches the rest length. The
    correction is split evenly between the endpoints unless one of them is
    pinned, in which case the other endpoint takes all of it. Corrections
    land on the current coordinates, so a joint shared by several segments
    accumulates all of their pulls within a sweep.

    Solving stops after `cfg.max_iterations` sweeps or as soon as every
    segment is within `cfg.tolerance` meters of its rest length. A pinned
    joint keeps its exact input coordinates. Coincident endpoints are pushed
    apart along +x.
    NaN coordinates are not validated; they pass through unchanged.
    """

    def __init__(self, cfg: SolverConfig | None = None):
        self.cfg = cfg or SolverConfig()
        self._last_iterations: int = 0
        self._last_max_error: float = 0.0

    @property
    def last_iterations(self) -> int:
        return int(self._last_iterations)

    @property
    def last_max_error(self) -> float:
        return float(self._last_max_error)

    def solve_player(self, player: Player, fixed_joint: Optional[Joint] = None) -> Player:
        coords = player.coords[np.newaxis].copy()
        pinned = np.zeros((1, JOINT_COUNT), dtype=bool)
        if fixed_joint is not None:
            pinned[0, int(fixed_joint)] = True
        self._relax(coords, pinned)
        return Player(coords[0])

    def solve_position(self, position: Position, fixed: Optional[PlayerJoint] = None) -> None:
        pinned = np.zeros(position.coords.shape[:2], dtype=bool)
        if fixed is not None:
            pinned[fixed.player, int(fixed.joint)] = True
        self._relax(position.coords, pinned)

    @staticmethod
    def residuals(coords: np.ndarray) -> np.ndarray:
        """Signed length error per player and segment, shape (players, segments)."""
        vec = coords[:, _SEGMENT_ENDS[:, 1]] - coords[:, _SEGMENT_ENDS[:, 0]]
        return np.linalg.norm(vec, axis=2) - _REST_LENGTHS

    def _max_error(self, coords: np.ndarray) -> float:
        return float(np.max(np.abs(self.residuals(coords))))

    @staticmethod
    def _shares(pinned: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        pin_a = pinned[:, _SEGMENT_ENDS[:, 0]]
        pin_b = pinned[:, _SEGMENT_ENDS[:, 1]]
        share_a = np.where(pin_a, 0.0, np.where(pin_b, 1.0, 0.5))
        share_b = np.where(pin_b, 0.0, np.where(pin_a, 1.0, 0.5))
        return share_a, share_b

    def _sweep(self, coords: np.ndarray, share_a: np.ndarray, share_b: np.ndarray) -> None:
        stiffness = float(self.cfg.stiffness)
        for idx in range(len(SEGMENTS)):
            a, b = _SEGMENT_ENDS[idx]
            vec = coords[:, b] - coords[:, a]
            dist = np.linalg.norm(vec, axis=1)
            degenerate = dist <= _DEGENERATE_LENGTH
            safe_dist = np.where(degenerate, 1.0, dist)
            direction = np.where(
                degenerate[:, np.newaxis],
                _FALLBACK_DIRECTION,
                vec / safe_dist[:, np.newaxis],
            )
            correction = (stiffness * (dist - _REST_LENGTHS[idx]))[:, np.newaxis] * direction
            coords[:, a] += share_a[:, idx, np.newaxis] * correction
            coords[:, b] -= share_b[:, idx, np.newaxis] * correction

    def _clamp_to_floor(self, coords: np.ndarray, pinned: np.ndarray) -> None:
        heights = coords[:, :, 1]
        lifted = np.maximum(heights, _JOINT_RADII)
        coords[:, :, 1] = np.where(pinned, heights, lifted)

    def _relax(self, coords: np.ndarray, pinned: np.ndarray) -> None:
        anchors = coords[pinned].copy()
        share_a, share_b = self._shares(pinned)

        iterations = 0
        max_error = self._max_error(coords)
        while iterations < self.cfg.max_iterations and max_error > self.cfg.tolerance:
            self._sweep(coords, share_a, share_b)
            if self.cfg.floor_clamp:
                self._clamp_to_floor(coords, pinned)
            iterations += 1
            max_error = self._max_error(coords)

        # Pinned joints only ever receive zero-weight corrections; restoring
        # them keeps their coordinates bit-identical even for non-finite input.
        coords[pinned] = anchors

        self._last_iterations = iterations
        self._last_max_error = max_error
        logger.debug(
            "spring relaxed %d player(s) in %d sweep(s), max segment error %.6f m",
            coords.shape[0],
            iterations,
            max_error,
        )


def spring_player(
    player: Player,
    fixed_joint: Optional[Joint] = None,
    cfg: SolverConfig | None = None,
) -> Player:
    return SpringSolver(cfg).solve_player(player, fixed_joint)


def spring(
    position: Position,
    fixed: Optional[PlayerJoint] = None,
    cfg: SolverConfig | None = None,
) -> None:
    SpringSolver(cfg).solve_position(position, fixed)
