# persona_api/services/persona_store.py
import logging
import threading
from datetime import datetime
from typing import Dict, Any, List, Optional, Protocol

from ..exceptions import PersonaNotFoundError
from ..models.personas import Persona

logger = logging.getLogger(__name__)


class PersonaStore(Protocol):
    """Storage interface for generated personas."""

    def create(self, **fields) -> Persona: ...

    def get(self, persona_id: str) -> Optional[Persona]: ...

    def require(self, persona_id: str) -> Persona: ...

    def get_latest_by_user(self, user_id: str) -> Optional[Persona]: ...

    def list_by_user(self, user_id: str) -> List[Persona]: ...

    def get_by_run(self, run_id: str) -> Optional[Persona]: ...

    def update(self, persona_id: str, **updates) -> Optional[Persona]: ...

    def delete(self, persona_id: str) -> bool: ...

    def stats(self) -> Dict[str, Any]: ...

    def count(self) -> int: ...


def _newest_first(persona: Persona):
    return (persona.created_at, int(persona.id))


class InMemoryPersonaStore:
    """Append-only persona store with sequential string ids."""

    def __init__(self):
        self._personas: List[Persona] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def create(
        self,
        user_id: str,
        run_id: str,
        name: str,
        trait_scores: Dict[str, float],
        pain_points: List[str],
        quotes: List[str],
    ) -> Persona:
        with self._lock:
            now = datetime.now()
            persona = Persona(
                id=str(self._next_id),
                user_id=user_id,
                run_id=run_id,
                name=name,
                trait_scores=dict(trait_scores),
                pain_points=list(pain_points),
                quotes=list(quotes),
                created_at=now,
                updated_at=now,
            )
            self._personas.append(persona)
            self._next_id += 1
        logger.info(f"Stored persona {persona.id} for run {run_id}")
        return persona

    def get(self, persona_id: str) -> Optional[Persona]:
        with self._lock:
            return next((p for p in self._personas if p.id == persona_id), None)

    def require(self, persona_id: str) -> Persona:
        persona = self.get(persona_id)
        if persona is None:
            raise PersonaNotFoundError(persona_id)
        return persona

    def list_by_user(self, user_id: str) -> List[Persona]:
        """Personas of a user, newest first."""
        with self._lock:
            owned = [p for p in self._personas if p.user_id == user_id]
        return sorted(owned, key=_newest_first, reverse=True)

    def get_latest_by_user(self, user_id: str) -> Optional[Persona]:
        personas = self.list_by_user(user_id)
        return personas[0] if personas else None

    def get_by_run(self, run_id: str) -> Optional[Persona]:
        with self._lock:
            return next((p for p in self._personas if p.run_id == run_id), None)

    def update(self, persona_id: str, **updates) -> Optional[Persona]:
        """Apply field updates; id and created_at are never overwritten."""
        updates.pop("id", None)
        updates.pop("created_at", None)
        unknown = sorted(set(updates) - set(Persona.model_fields))
        if unknown:
            raise ValueError(f"Unknown persona fields: {unknown}")
        with self._lock:
            for index, persona in enumerate(self._personas):
                if persona.id == persona_id:
                    updated = Persona.model_validate(
                        {
                            **persona.model_dump(),
                            **updates,
                            "updated_at": datetime.now(),
                        }
                    )
                    self._personas[index] = updated
                    return updated
        return None

    def delete(self, persona_id: str) -> bool:
        with self._lock:
            for index, persona in enumerate(self._personas):
                if persona.id == persona_id:
                    del self._personas[index]
                    return True
        return False

    def count(self) -> int:
        with self._lock:
            return len(self._personas)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            personas = list(self._personas)

        by_user: Dict[str, int] = {}
        totals: Dict[str, float] = {}
        for persona in personas:
            by_user[persona.user_id] = by_user.get(persona.user_id, 0) + 1
            for trait, score in persona.trait_scores.items():
                totals[trait] = totals.get(trait, 0.0) + score

        averages = {trait: total / len(personas) for trait, total in totals.items()}
        return {
            "total": len(personas),
            "byUser": by_user,
            "averageTraitScores": averages,
        }
