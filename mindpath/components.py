"""Dashboard cards. Pure functions from result fields to Shiny UI."""
from typing import Sequence

from shiny import ui

from mindpath.models import CareerRecommendation, Explainability

LOW_STRESS_CUTOFF = 30
HIGH_STRESS_CUTOFF = 60

STRESS_COLORS = {
    "low": "#22c55e",
    "moderate": "#eab308",
    "high": "#ef4444",
}


def fmt(value: float) -> str:
    """Show a number as received: 72.0 -> '72', 72.5 -> '72.5'."""
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def stress_level(value: float) -> str:
    if value < LOW_STRESS_CUTOFF:
        return "low"
    if value < HIGH_STRESS_CUTOFF:
        return "moderate"
    return "high"


def stress_color(value: float) -> str:
    return STRESS_COLORS[stress_level(value)]


def _bar(percent: float, color: str, class_: str = "mp-bar") -> ui.Tag:
    width = min(max(percent, 0), 100)
    return ui.div(
        ui.div(class_=f"{class_}-fill", style=f"width:{width}%; background:{color};"),
        class_=class_,
    )


def stress_indicator(value: float) -> ui.Tag:
    color = stress_color(value)
    return ui.div(
        ui.div(fmt(value), class_="mp-stat-value", style=f"color:{color};"),
        ui.div("Stress Index", class_="mp-stat-label"),
        _bar(value, color),
        class_=f"mp-card mp-stat stress-{stress_level(value)}",
    )


def score_card(value: float, label: str, color: str) -> ui.Tag:
    return ui.div(
        ui.div(f"{fmt(value)}%", class_="mp-stat-value", style=f"color:{color};"),
        ui.div(label, class_="mp-stat-label"),
        class_="mp-card mp-stat",
    )


def interest_clusters_card(clusters: Sequence[str]) -> ui.Tag:
    chips = [ui.tags.span(c, class_="mp-chip") for c in clusters]
    return ui.div(
        ui.div("Interest Clusters", class_="mp-stat-label mp-small"),
        ui.div(*chips, class_="mp-chips") if chips else ui.p("None identified.", class_="mp-muted"),
        class_="mp-card",
    )


def career_card(career: CareerRecommendation) -> ui.Tag:
    steps = [
        ui.tags.li(ui.tags.span(str(i + 1), class_="mp-step-num"), step)
        for i, step in enumerate(career.roadmap)
    ]
    return ui.div(
        ui.div(
            ui.div(
                ui.tags.span("Recommended Domain", class_="mp-overline"),
                ui.tags.span(f"{fmt(career.match_score)}% Match", class_="mp-match"),
                class_="mp-career-top",
            ),
            ui.h4(career.domain),
            class_="mp-career-head",
        ),
        ui.div(
            ui.p(f"“{career.reason}”", class_="mp-reason"),
            ui.h5("Key Skills Needed"),
            ui.div(*[ui.tags.span(s, class_="mp-skill") for s in career.key_skills], class_="mp-chips"),
            ui.h5("Learning Roadmap"),
            ui.tags.ol(*steps, class_="mp-roadmap"),
            class_="mp-career-body",
        ),
        class_="mp-card mp-career",
    )


def explainability_panel(explainability: Explainability) -> ui.Tag:
    features = []
    for feat in explainability.feature_importance:
        features.append(ui.div(
            ui.div(
                ui.tags.span(feat.feature),
                ui.tags.span(f"{fmt(feat.weight)}% influence"),
                class_="mp-feature-row",
            ),
            _bar(feat.weight, "#818cf8", class_="mp-thin-bar"),
        ))

    return ui.div(
        ui.h3("Explainable AI Insights"),
        ui.p(explainability.summary, class_="mp-summary"),
        ui.div(
            ui.p("Algorithm Confidence Markers", class_="mp-overline"),
            *features,
            class_="mp-features",
        ),
        class_="mp-explain",
    )


def ethics_notice() -> ui.Tag:
    return ui.div(
        ui.h4("Ethical AI & Privacy Disclaimer"),
        ui.p(
            ui.tags.strong("Non-Medical Disclaimer: "),
            "This system is an AI analysis tool and does NOT provide medical, clinical, or "
            "psychological diagnoses. Insights are for informational purposes only.",
        ),
        ui.p(
            ui.tags.strong("Privacy & Consent: "),
            "All analysis is based on text you voluntarily provide. Data is processed in-memory "
            "and not stored persistently unless explicitly saved by you.",
        ),
        ui.p(
            ui.tags.strong("Explainable AI: "),
            "Recommendations are derived from sentiment patterns and interest clustering. Feature "
            "importance metrics are provided to explain algorithmic reasoning.",
        ),
        class_="mp-ethics",
    )
