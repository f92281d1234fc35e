import json

import pytest

from mindpath.models import AssessmentResult


@pytest.fixture
def assessment_payload():
    return {
        "stressIndex": 42.5,
        "engagementScore": 78,
        "emotionalResilience": 63,
        "emotions": [
            {"name": "Joy", "value": 40},
            {"name": "Anxiety", "value": 25},
            {"name": "Curiosity", "value": 35},
        ],
        "trends": [
            {"segment": 1, "sentiment": 0.4, "intensity": 0.6},
            {"segment": 2, "sentiment": -0.2, "intensity": 0.8},
            {"segment": 3, "sentiment": 0.65, "intensity": 0.5},
        ],
        "interestClusters": ["Software Building", "Product Design"],
        "careerGuidance": [
            {
                "domain": "Product Engineering",
                "reason": "Sustained excitement about shipping features.",
                "matchScore": 88,
                "keySkills": ["Python", "User research"],
                "roadmap": ["Ship a side project", "Learn product analytics", "Lead a feature"],
            }
        ],
        "explainability": {
            "featureImportance": [
                {"feature": "Project language", "weight": 45},
                {"feature": "Overwhelm markers", "weight": 30},
            ],
            "summary": "Frequent building vocabulary drives the engineering match.",
        },
    }


@pytest.fixture
def assessment(assessment_payload):
    return AssessmentResult.from_dict(assessment_payload)


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def fake_post(monkeypatch):
    """Patch requests.post; returns the list of captured calls.

    Set `fake_post.response` to control what the next call returns.
    """
    calls = []

    def _post(url, params=None, json=None, headers=None, timeout=None):
        calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        response = _post.response
        if isinstance(response, Exception):
            raise response
        return response

    _post.response = FakeResponse(body=gemini_body("{}"))
    _post.calls = calls
    monkeypatch.setattr("mindpath.gemini_client.requests.post", _post)
    return _post
