"""
Handlewrap — Demo Application Factory
=======================================

What:  A FastAPI application whose routes are Handlers registered through the
       error translator.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Run with `uvicorn handlewrap.main:app`; used by the app-level tests.

    Request → FastAPI route → translator endpoint → [common mw] → handler
                                     │
                                     └── raised error → status + message,
                                                        full text → error sink
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from handlewrap import __version__
from handlewrap.config import Settings, error_sink_from_settings, settings as default_settings
from handlewrap.routes.health import health_check
from handlewrap.translator import handle_err, wrap_common_to_std

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure process-wide logging.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Handlewrap demo %s starting up", __version__)
    yield
    logger.info("Handlewrap demo shutting down")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the demo application.

    The translator is built once from settings and shared by every route;
    add common middleware to wrap_common_to_std to apply it to all of them.
    """
    cfg = cfg or default_settings
    setup_logging(cfg.log_level)

    app = FastAPI(
        title="Handlewrap Demo",
        version=__version__,
        lifespan=lifespan,
    )

    to_std = handle_err(error_sink=error_sink_from_settings(cfg))
    route = wrap_common_to_std(to_std)

    app.add_api_route("/health", route(health_check), methods=["GET"])

    return app


app = create_app()
