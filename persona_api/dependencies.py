# persona_api/dependencies.py
from typing import Optional

from fastapi import Header, HTTPException, Request

from .services.persona_builder import PersonaBuilder
from .services.persona_store import PersonaStore
from .services.run_store import TestRunStore


async def get_current_user(x_user_id: Optional[str] = Header(None)) -> str:
    """Caller identity, supplied by the upstream auth layer as X-User-Id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


def get_run_store(request: Request) -> TestRunStore:
    return request.app.state.run_store


def get_persona_store(request: Request) -> PersonaStore:
    return request.app.state.persona_store


def get_persona_builder(request: Request) -> PersonaBuilder:
    return request.app.state.persona_builder
