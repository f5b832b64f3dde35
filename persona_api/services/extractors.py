# persona_api/services/extractors.py
import re
from typing import List

from ..models.scoring import ExtractionRule, ScoringRules, DEFAULT_SCORING_RULES

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")


def split_sentences(transcript: str, min_length: int = 0) -> List[str]:
    """Split on sentence punctuation, keeping raw fragments longer than min_length once trimmed."""
    fragments = SENTENCE_BOUNDARY.split(transcript or "")
    return [fragment for fragment in fragments if len(fragment.strip()) > min_length]


def clean_sentence(sentence: str) -> str:
    return SURROUNDING_QUOTES.sub("", sentence.strip())


def _within_bounds(sentence: str, rule: ExtractionRule) -> bool:
    return rule.min_length < len(sentence) < rule.max_length


def extract_pain_points(
    transcript: str, rules: ScoringRules = DEFAULT_SCORING_RULES
) -> List[str]:
    """Return the first sentences that voice frustration, in transcript order."""
    rule = rules.pain_points
    pain_points = []
    for sentence in split_sentences(transcript, rule.min_fragment_length):
        lower = sentence.lower()
        if not any(keyword in lower for keyword in rule.keywords):
            continue
        cleaned = clean_sentence(sentence)
        if _within_bounds(cleaned, rule):
            pain_points.append(cleaned)
    return pain_points[: rule.limit]


def extract_quotes(
    transcript: str, rules: ScoringRules = DEFAULT_SCORING_RULES
) -> List[str]:
    """Return the first first-person or opinion sentences, in transcript order."""
    rule = rules.quotes
    quotes = []
    for sentence in split_sentences(transcript, rule.min_fragment_length):
        cleaned = clean_sentence(sentence)
        if not _within_bounds(cleaned, rule):
            continue
        lower = cleaned.lower()
        if any(marker in lower for marker in rule.keywords):
            quotes.append(cleaned)
    return quotes[: rule.limit]
