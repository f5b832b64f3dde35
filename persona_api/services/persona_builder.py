# persona_api/services/persona_builder.py
import logging
import random
from typing import Any, Dict, Optional

from ..exceptions import RunNotFoundError
from ..models.personas import PersonaResult
from ..models.scoring import ScoringRules, DEFAULT_SCORING_RULES
from .extractors import extract_pain_points, extract_quotes
from .naming import generate_persona_name
from .persona_store import PersonaStore
from .run_store import TestRunStore
from .trait_scorer import compute_trait_scores

logger = logging.getLogger(__name__)


class PersonaBuilder:
    """Service that turns a finished test run into a stored persona."""

    def __init__(
        self,
        run_store: TestRunStore,
        persona_store: PersonaStore,
        rules: ScoringRules = DEFAULT_SCORING_RULES,
        rng: Optional[random.Random] = None,
    ):
        self.run_store = run_store
        self.persona_store = persona_store
        self.rules = rules
        self.rng = rng or random.Random()

    def build_persona(self, run_id: str) -> PersonaResult:
        """
        Score a test run and persist a new persona for it.

        Args:
            run_id: Test run identifier

        Returns:
            PersonaResult with the new persona id and record

        Raises:
            RunNotFoundError: if no run exists for run_id
        """
        run = self.run_store.get(run_id)
        if run is None:
            raise RunNotFoundError(run_id)

        logger.info(
            f"Building persona for run {run_id}: {len(run.events)} events, "
            f"{len(run.transcript)} transcript chars, "
            f"{len(run.survey_responses)} survey responses"
        )

        trait_scores = compute_trait_scores(
            run.events, run.transcript, run.survey_responses, self.rules
        )
        pain_points = extract_pain_points(run.transcript, self.rules)
        quotes = extract_quotes(run.transcript, self.rules)
        name = generate_persona_name(
            trait_scores,
            rng=self.rng,
            names=self.rules.names,
            fallback=self.rules.fallback_descriptor,
        )

        persona = self.persona_store.create(
            user_id=run.user_id,
            run_id=run_id,
            name=name,
            trait_scores=trait_scores,
            pain_points=pain_points,
            quotes=quotes,
        )
        logger.info(f"Persona {persona.id} ({persona.name}) created for run {run_id}")
        return PersonaResult(persona_id=persona.id, persona=persona)

    def finalize_run(
        self,
        run_id: str,
        suite_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> PersonaResult:
        """Close a run and generate its persona."""
        self.run_store.mark_finalized(run_id, suite_id=suite_id, metadata=metadata)
        logger.info(f"Test run {run_id} finalized")
        return self.build_persona(run_id)
