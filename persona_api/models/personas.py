# persona_api/models/personas.py
from typing import List, Dict
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class Persona(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    run_id: str = Field(alias="runId")
    name: str
    trait_scores: Dict[str, float] = Field(alias="traitScores")
    pain_points: List[str] = Field(default_factory=list, alias="painPoints")
    quotes: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")

    def summary(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "runId": self.run_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


class PersonaResult(BaseModel):
    """Outcome of building a persona from a test run."""

    persona_id: str
    persona: Persona
