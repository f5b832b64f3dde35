# persona_api/main.py
import logging
import random
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import AppConfig, app_config, configure_logging
from .routers import personas, test_runs
from .services.persona_builder import PersonaBuilder
from .services.persona_store import InMemoryPersonaStore
from .services.rules_loader import load_scoring_rules
from .services.run_store import InMemoryTestRunStore

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(
    config: Optional[AppConfig] = None,
    run_store=None,
    persona_store=None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """Build the API with its stores constructed once and shared via app.state."""
    config = config or app_config
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="Usability Persona API",
        description="Collect usability test runs and derive user personas from them",
        version=VERSION,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Adjust in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.run_store = run_store if run_store is not None else InMemoryTestRunStore()
    app.state.persona_store = (
        persona_store if persona_store is not None else InMemoryPersonaStore()
    )
    if rng is None:
        rng = random.Random(config.NAME_SEED)
    app.state.persona_builder = PersonaBuilder(
        app.state.run_store,
        app.state.persona_store,
        rules=load_scoring_rules(config),
        rng=rng,
    )

    if config.is_local_mode():
        logger.info("Starting in LOCAL MODE")

    # Include routers
    app.include_router(test_runs.router)
    app.include_router(personas.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "version": VERSION}

    @app.get("/api/system-info")
    async def system_info(request: Request):
        """Get system information and configuration."""
        state = request.app.state
        return {
            "version": VERSION,
            "environment": state.config.ENV_TIER,
            "local_mode": state.config.is_local_mode(),
            "scoring_rules": state.config.SCORING_RULES_PATH or "default",
            "test_runs": len(state.run_store.list_runs()),
            "personas": state.persona_store.stats(),
        }

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(f"Unhandled exception for request {request.url}: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "message": str(exc)},
        )

    logger.info("Usability Persona API application created")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app_config.PORT)
