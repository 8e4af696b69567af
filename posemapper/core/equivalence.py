from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

import numpy as np

from posemapper.core.constants import LANDMARK_JOINTS
from posemapper.core.geometry import Reorientation, compose, rigid_align
from posemapper.core.position import Position, basically_same
from posemapper.core.reorientation import PositionReorientation, apply
from posemapper.models.config import EquivalenceConfig

logger = logging.getLogger(__name__)

_LANDMARK_INDICES = np.array([int(j) for j in LANDMARK_JOINTS], dtype=np.intp)


class ReorientationDetector:
    """Finds the reorientation, if any, that maps one position onto another.

    Hypotheses are tried in a fixed order: unswapped before swapped, and for
    each, proper rotations before mirrored ones. For each hypothesis the
    landmark joints of both players are aligned by least squares and the
    resulting transform is accepted only if it carries the whole reference
    position onto the candidate within `cfg.epsilon` (sum of squared joint
    distances). The first accepted hypothesis wins.
    """

    def __init__(self, cfg: EquivalenceConfig | None = None):
        self.cfg = cfg or EquivalenceConfig()

    def _hypotheses(self) -> list[Tuple[bool, bool]]:
        swaps = (False, True) if self.cfg.allow_swap else (False,)
        mirrors = (False, True) if self.cfg.allow_mirror else (False,)
        return [(swap, mirror) for swap in swaps for mirror in mirrors]

    def _fit(self, reference: Position, candidate: Position, swap: bool, mirror: bool) -> PositionReorientation:
        src = reference.coords[:, _LANDMARK_INDICES].reshape(-1, 3)
        target = candidate.coords[::-1] if swap else candidate.coords
        dst = target[:, _LANDMARK_INDICES].reshape(-1, 3)

        if mirror:
            reflect = Reorientation.mirror_x()
            aligned = rigid_align(src @ reflect.rotation.T, dst, allow_tilt=self.cfg.allow_tilt)
            spatial = compose(reflect, aligned)
        else:
            spatial = rigid_align(src, dst, allow_tilt=self.cfg.allow_tilt)
        return PositionReorientation(spatial, swap)

    def detect(self, reference: Position, candidate: Position) -> Optional[PositionReorientation]:
        for swap, mirror in self._hypotheses():
            r = self._fit(reference, candidate, swap, mirror)
            if basically_same(apply(r, reference), candidate, self.cfg.epsilon):
                logger.debug("positions congruent (swap=%s, mirror=%s)", swap, mirror)
                return r
        return None

    def find_congruent(
        self,
        positions: Iterable[Position],
        candidate: Position,
    ) -> Optional[Tuple[int, PositionReorientation]]:
        for index, stored in enumerate(positions):
            r = self.detect(stored, candidate)
            if r is not None:
                return index, r
        return None


def is_reoriented(
    reference: Position,
    candidate: Position,
    cfg: EquivalenceConfig | None = None,
) -> Optional[PositionReorientation]:
    return ReorientationDetector(cfg).detect(reference, candidate)


def find_congruent(
    positions: Iterable[Position],
    candidate: Position,
    cfg: EquivalenceConfig | None = None,
) -> Optional[Tuple[int, PositionReorientation]]:
    return ReorientationDetector(cfg).find_congruent(positions, candidate)
