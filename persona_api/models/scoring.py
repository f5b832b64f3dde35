# persona_api/models/scoring.py
from typing import List
from pydantic import BaseModel, Field, field_validator, model_validator


TRAITS = [
    "Analytical",
    "Creative",
    "Social",
    "Practical",
    "Confident",
    "Cautious",
    "Efficient",
    "Thorough",
]


class EventThresholdRule(BaseModel):
    event: str
    threshold: int  # fires when the count is strictly greater
    trait: str
    increment: float


class KeywordRule(BaseModel):
    keywords: List[str]
    trait: str
    increment: float


class SurveyRule(BaseModel):
    question_keyword: str
    answer_keyword: str
    trait: str
    increment: float


class ExtractionRule(BaseModel):
    keywords: List[str]
    min_fragment_length: int  # trimmed fragment must be longer than this
    min_length: int  # cleaned sentence must be longer than this
    max_length: int  # ...and shorter than this
    limit: int


class ScoringRules(BaseModel):
    """Tunable thresholds, keywords and limits for the persona pipeline."""

    traits: List[str] = Field(default_factory=lambda: list(TRAITS))
    event_rules: List[EventThresholdRule]
    transcript_rules: List[KeywordRule]
    survey_rules: List[SurveyRule]
    pain_points: ExtractionRule
    quotes: ExtractionRule
    names: List[str]
    fallback_descriptor: str = "balanced"

    @field_validator("names")
    @classmethod
    def names_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("names must contain at least one entry")
        return value

    @model_validator(mode="after")
    def rules_target_known_traits(self) -> "ScoringRules":
        targets = (
            [rule.trait for rule in self.event_rules]
            + [rule.trait for rule in self.transcript_rules]
            + [rule.trait for rule in self.survey_rules]
        )
        unknown = sorted(set(targets) - set(self.traits))
        if unknown:
            raise ValueError(f"Rules reference unknown traits: {unknown}")
        return self


DEFAULT_SCORING_RULES = ScoringRules(
    event_rules=[
        EventThresholdRule(event="click", threshold=10, trait="Practical", increment=0.3),
        EventThresholdRule(event="hover", threshold=5, trait="Cautious", increment=0.2),
        EventThresholdRule(event="scroll", threshold=3, trait="Thorough", increment=0.2),
        EventThresholdRule(event="keypress", threshold=20, trait="Efficient", increment=0.3),
    ],
    transcript_rules=[
        KeywordRule(keywords=["think", "analyze"], trait="Analytical", increment=0.4),
        KeywordRule(keywords=["creative", "imagine"], trait="Creative", increment=0.4),
        KeywordRule(keywords=["people", "team"], trait="Social", increment=0.4),
        KeywordRule(keywords=["confident", "sure"], trait="Confident", increment=0.3),
    ],
    survey_rules=[
        SurveyRule(
            question_keyword="confidence",
            answer_keyword="high",
            trait="Confident",
            increment=0.2,
        ),
        SurveyRule(
            question_keyword="preference",
            answer_keyword="creative",
            trait="Creative",
            increment=0.2,
        ),
    ],
    pain_points=ExtractionRule(
        keywords=[
            "frustrated",
            "confused",
            "difficult",
            "hard",
            "problem",
            "issue",
            "doesn't work",
            "broken",
            "slow",
            "complicated",
            "unclear",
            "annoying",
            "bothersome",
            "trouble",
            "struggle",
            "challenge",
        ],
        min_fragment_length=10,
        min_length=10,
        max_length=200,
        limit=3,
    ),
    quotes=ExtractionRule(
        keywords=["i ", "me ", "my ", "think", "feel", "like", "prefer"],
        min_fragment_length=15,
        min_length=20,
        max_length=150,
        limit=5,
    ),
    names=[
        "Alex",
        "Jordan",
        "Casey",
        "Taylor",
        "Morgan",
        "Riley",
        "Quinn",
        "Avery",
        "Sam",
        "Drew",
        "Blake",
        "Cameron",
        "Jamie",
        "Parker",
        "Reese",
        "Dakota",
    ],
)
