"""HTTP app exposing the IWGO commands (list, inspect, place, reload)."""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI

from structure_engines.config import runtime_config
from structure_engines.structures.routes import get_manager, router as iwgo_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=runtime_config.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Structure Engines")
    app.include_router(iwgo_router)

    @app.get("/health")
    def health_check() -> Dict[str, Any]:
        return {"service": "structure_engines", "status": "ok"}

    @app.get("/ops/status")
    def status() -> Dict[str, Any]:
        """Runtime config plus the loaded IWGO names."""
        snapshot = runtime_config.config_snapshot()
        snapshot["iwgos"] = get_manager().list_names()
        return snapshot

    logger.info("Structure engines app created (folder=%s)", runtime_config.get_iwgo_folder())
    return app
