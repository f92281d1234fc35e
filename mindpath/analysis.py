"""Behavioral assessment via a single structured Gemini call."""
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from mindpath.errors import AnalysisError
from mindpath.gemini_client import GeminiClient
from mindpath.models import AssessmentResult

logger = logging.getLogger(__name__)


def _array(items: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "ARRAY", "items": items}


def _object(properties: Dict[str, Any], required=None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "OBJECT", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


STRING = {"type": "STRING"}
NUMBER = {"type": "NUMBER"}

REQUIRED_FIELDS = (
    "stressIndex",
    "engagementScore",
    "emotionalResilience",
    "emotions",
    "trends",
    "interestClusters",
    "careerGuidance",
    "explainability",
)

RESPONSE_SCHEMA: Dict[str, Any] = _object(
    {
        "stressIndex": {"type": "NUMBER", "description": "Stress level from 0 to 100"},
        "engagementScore": {
            "type": "NUMBER",
            "description": "Level of active engagement in interests from 0 to 100",
        },
        "emotionalResilience": {"type": "NUMBER", "description": "Ability to handle setbacks from 0 to 100"},
        "emotions": _array(_object({"name": STRING, "value": NUMBER}, required=("name", "value"))),
        "trends": _array(_object(
            {
                "segment": NUMBER,
                "sentiment": {"type": "NUMBER", "description": "Sentiment polarity from -1 to 1"},
                "intensity": {"type": "NUMBER", "description": "Emotional intensity from 0 to 1"},
            },
            required=("segment", "sentiment", "intensity"),
        )),
        "interestClusters": _array(STRING),
        "careerGuidance": _array(_object(
            {
                "domain": STRING,
                "reason": STRING,
                "matchScore": {"type": "NUMBER", "description": "Match from 0 to 100"},
                "keySkills": _array(STRING),
                "roadmap": _array(STRING),
            },
            required=("domain", "reason", "matchScore", "keySkills", "roadmap"),
        )),
        "explainability": _object({
            "featureImportance": _array(_object({"feature": STRING, "weight": NUMBER})),
            "summary": STRING,
        }),
    },
    required=REQUIRED_FIELDS,
)


def build_prompt(text: str) -> str:
    """Embed the user's text in the non-clinical analysis instruction."""
    return f"""Analyze the following text (simulated social media posts/blogs) to provide behavioral well-being insights and career guidance.
IMPORTANT:
1. Do NOT diagnose medical or psychological illnesses.
2. Use non-medical terms like 'stress index', 'engagement', 'emotional trend'.
3. Be objective and provide a career roadmap.

Text: "{text}"
"""


def analyze_behavioral_data(text: str, client: Optional[GeminiClient] = None) -> AssessmentResult:
    """
    Run one assessment of `text` against the external model.

    Args:
        text: Raw user-provided text
        client: Gemini client; one is created from the environment if omitted

    Returns:
        The validated AssessmentResult

    Raises:
        AnalysisError: on any service, transport or response-shape failure
    """
    if client is None:
        try:
            client = GeminiClient()
        except ValueError as e:
            raise AnalysisError(str(e)) from e

    resp = client.generate_json(build_prompt(text), response_schema=RESPONSE_SCHEMA)
    if not resp.get("ok"):
        raise AnalysisError(resp.get("error") or "Analysis request failed")

    data = resp.get("data")
    if not isinstance(data, dict):
        raise AnalysisError("Invalid assessment response structure.")

    try:
        result = AssessmentResult.from_dict(data)
    except ValidationError as e:
        logger.warning("Assessment response failed validation: %d error(s)", e.error_count())
        raise AnalysisError("Invalid assessment response structure.") from e

    logger.info(
        "Assessment parsed: %d emotions, %d trend points, %d career domains",
        len(result.emotions), len(result.trends), len(result.career_guidance),
    )
    return result
