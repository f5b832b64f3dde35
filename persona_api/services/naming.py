# persona_api/services/naming.py
import random
from typing import Dict, Optional, Sequence

from ..models.scoring import DEFAULT_SCORING_RULES


def top_trait(trait_scores: Dict[str, float]) -> Optional[str]:
    """Highest scoring trait; ties go to the alphabetically first name."""
    if not trait_scores:
        return None
    return min(trait_scores, key=lambda trait: (-trait_scores[trait], trait))


def generate_persona_name(
    trait_scores: Dict[str, float],
    rng: Optional[random.Random] = None,
    names: Sequence[str] = DEFAULT_SCORING_RULES.names,
    fallback: str = DEFAULT_SCORING_RULES.fallback_descriptor,
) -> str:
    """Build a display name such as "Riley the analytical"."""
    rng = rng or random.Random()
    first_name = rng.choice(list(names))
    descriptor = top_trait(trait_scores)
    descriptor = descriptor.lower() if descriptor else fallback
    return f"{first_name} the {descriptor}"
