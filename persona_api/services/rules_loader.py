# persona_api/services/rules_loader.py
import logging

from ..config import AppConfig
from ..models.scoring import ScoringRules, DEFAULT_SCORING_RULES

logger = logging.getLogger(__name__)


def load_scoring_rules(config: AppConfig) -> ScoringRules:
    """
    Resolve the scoring rule table for this deployment.

    Uses the built-in defaults unless SCORING_RULES_PATH points at a JSON
    override, which is read from local storage or the config bucket and
    validated into ScoringRules.
    """
    if not config.SCORING_RULES_PATH:
        logger.info("Using default scoring rules")
        return DEFAULT_SCORING_RULES

    data = config.load_json_file(config.SCORING_RULES_PATH)
    rules = ScoringRules.model_validate(data)
    logger.info(
        f"Loaded scoring rules from {config.SCORING_RULES_PATH}: "
        f"{len(rules.event_rules)} event, {len(rules.transcript_rules)} transcript, "
        f"{len(rules.survey_rules)} survey rules"
    )
    return rules
