from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from posemapper.core.equivalence import ReorientationDetector
from posemapper.core.spring import SpringSolver
from posemapper.models.config import AppConfig
from posemapper.services.config_store import ConfigStore


@dataclass
class RuntimeContext:
    config_store: ConfigStore
    detector: ReorientationDetector

    def solver(self) -> SpringSolver:
        # Solvers keep per-call stats, so each request gets its own.
        return SpringSolver(self.config_store.config.solver)

    def reconfigure(self, cfg: AppConfig) -> None:
        self.detector = ReorientationDetector(cfg.equivalence)


def build_runtime(config_path: Path) -> RuntimeContext:
    config_store = ConfigStore(config_path)
    return RuntimeContext(
        config_store=config_store,
        detector=ReorientationDetector(config_store.config.equivalence),
    )
