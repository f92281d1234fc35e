"""Plotly figure specs for the dashboard charts.

Figures are plain dicts rendered client-side by Plotly.js (loaded from the CDN
in the page head).
"""
import json
from typing import Any, Dict, Sequence

from shiny import ui

from mindpath.models import EmotionWeight, TrendPoint

PALETTE = ["#6366f1", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6"]
SENTIMENT_COLOR = "#6366f1"
INTENSITY_COLOR = "#f59e0b"
CHART_HEIGHT = 300


def _base_layout(**extra: Any) -> Dict[str, Any]:
    layout = {
        "margin": {"l": 40, "r": 10, "t": 10, "b": 40},
        "paper_bgcolor": "#ffffff",
        "plot_bgcolor": "#ffffff",
        "height": CHART_HEIGHT,
    }
    layout.update(extra)
    return layout


def emotion_pie_figure(emotions: Sequence[EmotionWeight]) -> Dict[str, Any]:
    """Pie chart over emotion weights, colors cycling through PALETTE."""
    data = {
        "type": "pie",
        "labels": [e.name for e in emotions],
        "values": [e.value for e in emotions],
        "marker": {"colors": [PALETTE[i % len(PALETTE)] for i in range(len(emotions))]},
        "textinfo": "label+percent",
        "hovertemplate": "<b>%{label}</b><br>%{value}<extra></extra>",
        "sort": False,
    }
    return {"data": [data], "layout": _base_layout(showlegend=False)}


def sentiment_trend_figure(trends: Sequence[TrendPoint]) -> Dict[str, Any]:
    """Area chart of sentiment per content segment, with intensity overlaid."""
    segments = [t.segment for t in trends]
    sentiment = {
        "type": "scatter",
        "mode": "lines",
        "name": "Sentiment",
        "x": segments,
        "y": [t.sentiment for t in trends],
        "fill": "tozeroy",
        "line": {"color": SENTIMENT_COLOR, "shape": "spline"},
        "fillcolor": "rgba(99, 102, 241, 0.35)",
    }
    intensity = {
        "type": "scatter",
        "mode": "lines+markers",
        "name": "Intensity",
        "x": segments,
        "y": [t.intensity for t in trends],
        "line": {"color": INTENSITY_COLOR, "dash": "dot"},
    }
    layout = _base_layout(
        xaxis={"title": {"text": "Timeline Content Blocks"}},
        yaxis={"title": {"text": "Sentiment Polarity"}, "range": [-1, 1], "zeroline": True},
        legend={"orientation": "h", "y": -0.25},
    )
    return {"data": [sentiment, intensity], "layout": layout}


def plotly_chart(div_id: str, figure: Dict[str, Any]) -> ui.HTML:
    """Embed a figure spec as a div plus the script that draws it."""
    # Labels come from the model; keep them from closing the script tag
    fig_json = (json.dumps(figure)
                .replace("<", "\\u003c")
                .replace(">", "\\u003e")
                .replace("&", "\\u0026"))
    return ui.HTML(f"""
        <div id="{div_id}" class="mp-chart" style="width:100%;height:{CHART_HEIGHT}px;"></div>
        <script>
            (function(){{
                var spec = {fig_json};
                if (window.Plotly && document.getElementById('{div_id}')) {{
                    Plotly.newPlot('{div_id}', spec.data, spec.layout, {{displayModeBar:false, responsive:true}});
                }}
            }})();
        </script>
        """)
