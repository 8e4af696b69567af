from __future__ import annotations

import logging
from pathlib import Path

import yaml

from posemapper.models.config import AppConfig, ConfigUpdate

logger = logging.getLogger(__name__)


class ConfigStore:
    def __init__(self, path: Path):
        self.path = path
        self.config = self._load_or_create()

    def _load_or_create(self) -> AppConfig:
        if self.path.exists():
            payload = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
            return AppConfig.model_validate(payload)
        cfg = AppConfig()
        self.save(cfg)
        logger.info("created default config at %s", self.path)
        return cfg

    def save(self, cfg: AppConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.safe_dump(cfg.model_dump(), sort_keys=False),
            encoding="utf-8",
        )
        self.config = cfg

    def update(self, update: ConfigUpdate) -> AppConfig:
        payload = self.config.model_dump()
        changes = {
            section: values
            for section, values in update.model_dump(exclude_unset=True).items()
            if values is not None
        }
        for section, values in changes.items():
            payload[section] = {**payload[section], **values}
        merged = AppConfig.model_validate(payload)
        self.save(merged)
        logger.info("config updated: %s", sorted(changes))
        return merged
