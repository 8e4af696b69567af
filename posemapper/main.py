from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI

from posemapper.api.rest import router as rest_router
from posemapper.logging_config import setup_logging
from posemapper.services.runtime import build_runtime

DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def create_app(config_path: Path | None = None) -> FastAPI:
    runtime = build_runtime(config_path or DEFAULT_CONFIG_PATH)
    log_cfg = runtime.config_store.config.logging
    setup_logging(log_cfg.level, log_cfg.file)

    app = FastAPI(title="Pose Mapper", version="0.1.0")
    app.state.runtime = runtime
    app.include_router(rest_router)
    return app


app = create_app()
