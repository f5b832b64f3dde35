# persona_api/services/trait_scorer.py
from collections import Counter
from typing import Dict, Iterable

from ..models.scoring import ScoringRules, DEFAULT_SCORING_RULES
from ..models.test_runs import Event, SurveyResponse


def count_events(events: Iterable[Event]) -> Counter:
    return Counter(event.name for event in events)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


def compute_trait_scores(
    events: Iterable[Event],
    transcript: str,
    survey_responses: Iterable[SurveyResponse],
    rules: ScoringRules = DEFAULT_SCORING_RULES,
) -> Dict[str, float]:
    """
    Score the fixed trait set from a run's interaction data.

    Every rule adds a fixed increment to one trait; nothing is weighted or
    normalized beyond clamping each score into [0, 1].

    Args:
        events: Logged interaction events
        transcript: Accumulated think-aloud transcript
        survey_responses: Survey answers given during the run
        rules: Thresholds, keywords and increments to apply

    Returns:
        Mapping of every trait name to a score between 0 and 1
    """
    scores = {trait: 0.0 for trait in rules.traits}

    # Behavioural patterns
    counts = count_events(events)
    for rule in rules.event_rules:
        if counts.get(rule.event, 0) > rule.threshold:
            scores[rule.trait] += rule.increment

    # Think-aloud keywords, one increment per rule
    transcript_lower = (transcript or "").lower()
    for rule in rules.transcript_rules:
        if any(keyword in transcript_lower for keyword in rule.keywords):
            scores[rule.trait] += rule.increment

    # Survey answers, one increment per matching response
    for response in survey_responses:
        if not response.question or not response.answer:
            continue
        question = response.question.lower()
        answer = response.answer.lower()
        for rule in rules.survey_rules:
            if rule.question_keyword in question and rule.answer_keyword in answer:
                scores[rule.trait] += rule.increment

    # round() drops float noise such as 0.30000000000000004
    return {trait: round(clamp(score), 10) for trait, score in scores.items()}
