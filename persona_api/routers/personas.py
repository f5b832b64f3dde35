# persona_api/routers/personas.py
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException
from typing import Dict, Any

from ..dependencies import get_current_user, get_persona_store
from ..exceptions import PersonaNotFoundError
from ..services.persona_store import PersonaStore

router = APIRouter(
    prefix="/api/personas",
    tags=["personas"],
    responses={404: {"description": "Not found"}},
)

logger = logging.getLogger(__name__)


@router.get("/me", response_model=Dict[str, Any])
def get_my_persona(
    user_id: str = Depends(get_current_user),
    persona_store: PersonaStore = Depends(get_persona_store),
):
    """Return the latest persona of the caller."""
    persona = persona_store.get_latest_by_user(user_id)
    if persona is None:
        raise HTTPException(status_code=404, detail="No persona found for this user")

    return {
        "success": True,
        "data": {
            "personaId": persona.id,
            "name": persona.name,
            "traitScores": persona.trait_scores,
            "painPoints": persona.pain_points,
            "quotes": persona.quotes,
            "createdAt": persona.created_at,
        },
    }


@router.get("", response_model=Dict[str, Any])
def list_my_personas(
    user_id: str = Depends(get_current_user),
    persona_store: PersonaStore = Depends(get_persona_store),
):
    """List the caller's personas, newest first."""
    personas = persona_store.list_by_user(user_id)
    return {
        "success": True,
        "data": [persona.summary() for persona in personas],
        "meta": {"total": len(personas), "timestamp": datetime.now().isoformat()},
    }


@router.get("/{persona_id}", response_model=Dict[str, Any])
def get_persona(
    persona_id: str,
    user_id: str = Depends(get_current_user),
    persona_store: PersonaStore = Depends(get_persona_store),
):
    """Return one persona owned by the caller."""
    try:
        persona = persona_store.require(persona_id)
    except PersonaNotFoundError:
        logger.warning(f"Persona {persona_id} requested but not found")
        raise HTTPException(
            status_code=404, detail=f"Persona with ID {persona_id} not found"
        )
    if persona.user_id != user_id:
        logger.warning(f"User {user_id} denied access to persona {persona_id}")
        raise HTTPException(status_code=403, detail="Access denied to this persona")

    return {"success": True, "data": persona.model_dump(by_alias=True)}
