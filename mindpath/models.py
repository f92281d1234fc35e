"""Assessment result returned by the external model.

Attribute names are snake_case; the JSON document produced by the model (and
the export) uses the camelCase aliases.
"""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class EmotionWeight(_WireModel):
    name: str
    value: float = Field(ge=0)


class TrendPoint(_WireModel):
    segment: float
    sentiment: float = Field(ge=-1, le=1)   # polarity
    intensity: float = Field(ge=0, le=1)


class CareerRecommendation(_WireModel):
    domain: str
    reason: str
    match_score: float = Field(ge=0, le=100)
    key_skills: List[str]
    roadmap: List[str]


class FeatureImportance(_WireModel):
    feature: str
    weight: float


class Explainability(_WireModel):
    feature_importance: List[FeatureImportance] = Field(default_factory=list)
    summary: str = ""


class AssessmentResult(_WireModel):
    """Behavioral well-being and career assessment for one piece of text."""

    stress_index: float = Field(ge=0, le=100)
    engagement_score: float = Field(ge=0, le=100)
    emotional_resilience: float = Field(ge=0, le=100)
    emotions: List[EmotionWeight]
    trends: List[TrendPoint]
    interest_clusters: List[str]
    career_guidance: List[CareerRecommendation]
    explainability: Explainability

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssessmentResult":
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Wire (camelCase) form, suitable for JSON export."""
        return self.model_dump(by_alias=True)
