"""The four screens of the app, one function per view state."""
from typing import Optional

from shiny import ui

from mindpath import charts
from mindpath.components import (
    career_card,
    ethics_notice,
    explainability_panel,
    interest_clusters_card,
    score_card,
    stress_indicator,
)
from mindpath.models import AssessmentResult

FEATURES = [
    ("Behavioral Well-being",
     "Understand your stress indices and emotional resilience through your writing style."),
    ("Career Navigation",
     "Discover high-alignment career domains based on your interests and personality markers."),
    ("Privacy First",
     "Consent-based, anonymized analysis with a strict non-medical classification policy."),
]

PLACEHOLDER = (
    "I spent the whole day working on my new app today. I'm feeling a bit overwhelmed "
    "but the progress is exciting..."
)

CONSENT_LABEL = (
    "I consent to the anonymized analysis of this text for behavioral insights and career "
    "guidance purposes. I understand this system does not provide medical or psychological diagnosis."
)


def landing_view() -> ui.Tag:
    cards = [
        ui.div(ui.h3(title), ui.p(desc, class_="mp-muted"), class_="mp-card mp-feature")
        for title, desc in FEATURES
    ]
    return ui.div(
        ui.h1("MindPath ", ui.tags.span("AI", class_="mp-accent"), class_="mp-hero-title"),
        ui.p(
            "Unlock your true potential. We use ethical AI to translate your behavioral patterns "
            "into personalized career roadmaps and well-being insights.",
            class_="mp-hero-lead",
        ),
        ui.div(*cards, class_="mp-grid-3"),
        ui.input_action_button("start_demo", "Try Demo Now", class_="btn-primary btn-lg mp-pill"),
        class_="mp-landing",
    )


def input_view(text: str = "", consent: bool = False, error: Optional[str] = None,
               has_api_key: bool = True) -> ui.Tag:
    warning = None
    if not has_api_key:
        warning = ui.div(
            ui.tags.strong("⚠ GEMINI_API_KEY not set. "),
            "Analyses will fail until an API key is configured.",
            class_="mp-warning",
        )

    return ui.div(
        ui.input_action_link("back_home", "← Back to Home"),
        ui.div(
            ui.h2("Behavioral Assessment"),
            ui.p(
                "Paste your social media posts, blog snippets, or journal entries to begin analysis.",
                class_="mp-muted",
            ),
            warning,
            ui.input_text_area("content_input", None, value=text, rows=10,
                               placeholder=PLACEHOLDER, width="100%"),
            ui.div(ui.tags.strong("! "), error, class_="mp-error") if error else None,
            ui.input_checkbox("consent", CONSENT_LABEL, value=consent),
            ui.div(
                ui.input_action_button("analyze_btn", "Run Behavioral Engine",
                                       class_="btn-primary btn-lg w-100"),
                ui.input_action_link("reset_btn", "Clear form"),
                class_="mp-actions",
            ),
            class_="mp-card mp-form",
        ),
        ethics_notice(),
        class_="mp-narrow",
    )


def loading_view() -> ui.Tag:
    return ui.div(
        ui.div(class_="spinner"),
        ui.h2("Analyzing Behavioral Patterns"),
        ui.p("Running semantic clustering and sentiment models...", class_="mp-muted"),
        ui.input_action_button("cancel_btn", "Cancel", class_="btn-outline-secondary"),
        class_="mp-loading",
    )


def dashboard_view(result: AssessmentResult) -> ui.Tag:
    emotions = (
        charts.plotly_chart("emotion_pie", charts.emotion_pie_figure(result.emotions))
        if result.emotions else ui.p("No emotion data.", class_="mp-muted")
    )
    trends = (
        charts.plotly_chart("sentiment_trend", charts.sentiment_trend_figure(result.trends))
        if result.trends else ui.p("No trend data.", class_="mp-muted")
    )

    return ui.div(
        ui.div(
            ui.div(
                ui.h1("Analysis Dashboard"),
                ui.p("Comprehensive behavioral and career outlook", class_="mp-muted"),
            ),
            ui.div(
                ui.download_button("download_json", "Download JSON", class_="btn-outline-success"),
                ui.download_button("download_csv", "Download CSV", class_="btn-outline-info"),
                ui.input_action_button("new_assessment", "Start New Assessment",
                                       class_="btn-outline-secondary"),
                class_="mp-actions",
            ),
            class_="mp-dash-head",
        ),
        ui.div(
            stress_indicator(result.stress_index),
            score_card(result.engagement_score, "Engagement", "#4f46e5"),
            score_card(result.emotional_resilience, "Resilience", "#14b8a6"),
            interest_clusters_card(result.interest_clusters),
            class_="mp-grid-4",
        ),
        ui.div(
            ui.div(ui.h3("Emotional Distribution"), emotions, class_="mp-card"),
            ui.div(ui.h3("Sentiment Trend Analysis"), trends, class_="mp-card"),
            class_="mp-grid-2",
        ),
        ui.h2("Career Guidance & Roadmaps"),
        ui.div(*[career_card(c) for c in result.career_guidance], class_="mp-grid-3"),
        explainability_panel(result.explainability),
        class_="mp-wide",
    )
