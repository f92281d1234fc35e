"""User-initiated downloads of the current assessment."""
import json

import pandas as pd

from mindpath.models import AssessmentResult

CSV_COLUMNS = ["section", "label", "value", "detail"]


def to_json(result: AssessmentResult) -> str:
    return json.dumps(result.to_dict(), indent=2)


def to_frame(result: AssessmentResult) -> pd.DataFrame:
    """Flatten a result into one row per scored item."""
    rows = [
        {"section": "scores", "label": "stressIndex", "value": result.stress_index, "detail": ""},
        {"section": "scores", "label": "engagementScore", "value": result.engagement_score, "detail": ""},
        {"section": "scores", "label": "emotionalResilience", "value": result.emotional_resilience,
         "detail": ""},
    ]
    for e in result.emotions:
        rows.append({"section": "emotions", "label": e.name, "value": e.value, "detail": ""})
    for t in result.trends:
        rows.append({
            "section": "trends",
            "label": f"segment {t.segment:g}",
            "value": t.sentiment,
            "detail": f"intensity={t.intensity:g}",
        })
    for c in result.interest_clusters:
        rows.append({"section": "interestClusters", "label": c, "value": None, "detail": ""})
    for c in result.career_guidance:
        rows.append({
            "section": "careerGuidance",
            "label": c.domain,
            "value": c.match_score,
            "detail": "; ".join(c.roadmap),
        })
    for f in result.explainability.feature_importance:
        rows.append({"section": "featureImportance", "label": f.feature, "value": f.weight, "detail": ""})

    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def to_csv(result: AssessmentResult) -> str:
    return to_frame(result).to_csv(index=False)
