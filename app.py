"""
MindPath AI
Single-page app translating free-text behavioral signals into well-being
insights and career roadmaps.
"""
from shiny import App, ui, render, reactive

from mindpath.analysis import analyze_behavioral_data
from mindpath.config import load_settings
from mindpath.controller import AssessmentController
from mindpath.export import to_csv, to_json
from mindpath.gemini_client import GeminiClient
from mindpath.logging_config import setup_logging
from mindpath.session_state import SessionState

settings = load_settings()
setup_logging(settings.log_level)

app_ui = ui.page_fluid(
    ui.tags.head(
        ui.tags.style("""
            body { background:#f8fafc; color:#0f172a; }
            .mp-nav { display:flex; align-items:center; justify-content:space-between; padding:18px 8px; border-bottom:1px solid #e2e8f0; margin-bottom:24px; }
            .mp-brand { font-size:1.5em; font-weight:900; color:#0f172a; text-decoration:none; }
            .mp-accent { color:#4f46e5; }
            .mp-muted { color:#64748b; }
            .mp-small { font-size:0.75em; }
            .mp-card { background:#fff; padding:24px; border-radius:16px; border:1px solid #f1f5f9; box-shadow:0 1px 2px rgba(0,0,0,.04); }
            .mp-landing { max-width:1100px; margin:0 auto; padding:60px 0; text-align:center; }
            .mp-hero-title { font-size:4em; font-weight:800; }
            .mp-hero-lead { font-size:1.25em; color:#475569; max-width:640px; margin:0 auto 40px; }
            .mp-grid-2, .mp-grid-3, .mp-grid-4 { display:grid; gap:24px; margin-bottom:32px; text-align:left; }
            .mp-grid-2 { grid-template-columns:repeat(auto-fit, minmax(380px, 1fr)); }
            .mp-grid-3 { grid-template-columns:repeat(auto-fit, minmax(280px, 1fr)); }
            .mp-grid-4 { grid-template-columns:repeat(auto-fit, minmax(220px, 1fr)); }
            .mp-pill { border-radius:999px; padding:14px 40px; }
            .mp-narrow { max-width:900px; margin:0 auto; padding:24px 0; }
            .mp-wide { max-width:1280px; margin:0 auto; padding:24px 0; }
            .mp-form textarea { background:#f8fafc; border-radius:12px; }
            .mp-actions { display:flex; gap:12px; align-items:center; margin-top:16px; }
            .mp-error { margin:12px 0; padding:10px 12px; color:#dc2626; background:#fef2f2; border:1px solid #fee2e2; border-radius:8px; font-weight:500; }
            .mp-warning { margin:12px 0; padding:10px 12px; color:#854d0e; background:#fef9c3; border-radius:8px; }
            .mp-ethics { margin:32px 0; padding:20px 24px; background:#eff6ff; border-left:4px solid #3b82f6; border-radius:0 8px 8px 0; color:#1e3a8a; font-size:0.9em; }
            .mp-loading { min-height:70vh; display:flex; flex-direction:column; align-items:center; justify-content:center; gap:8px; }
            .spinner { width:54px; height:54px; border:6px solid #e0e7ff; border-top-color:#4f46e5; border-radius:50%; animation: spin .8s linear infinite; margin-bottom:18px; }
            @keyframes spin { to { transform: rotate(360deg); } }
            .mp-dash-head { display:flex; justify-content:space-between; align-items:center; margin-bottom:24px; flex-wrap:wrap; }
            .mp-stat { display:flex; flex-direction:column; align-items:center; justify-content:center; }
            .mp-stat-value { font-size:3em; font-weight:700; }
            .mp-stat-label { color:#64748b; font-weight:500; text-transform:uppercase; letter-spacing:.08em; font-size:0.85em; }
            .mp-bar, .mp-thin-bar { width:100%; background:#f1f5f9; border-radius:999px; overflow:hidden; }
            .mp-bar { height:8px; margin-top:16px; }
            .mp-thin-bar { height:4px; background:rgba(255,255,255,.1); }
            .mp-bar-fill, .mp-thin-bar-fill { height:100%; transition:width 1s; }
            .mp-chips { display:flex; flex-wrap:wrap; gap:6px; margin-bottom:16px; }
            .mp-chip { padding:2px 8px; background:#eef2ff; color:#4338ca; border-radius:6px; font-size:0.75em; font-weight:600; }
            .mp-skill { padding:2px 8px; background:#f1f5f9; color:#334155; border-radius:4px; font-size:0.75em; }
            .mp-career { padding:0; overflow:hidden; }
            .mp-career-head { background:#4f46e5; color:#fff; padding:20px 24px; }
            .mp-career-top { display:flex; justify-content:space-between; align-items:center; }
            .mp-overline { font-size:0.7em; text-transform:uppercase; font-weight:700; letter-spacing:.15em; opacity:.8; }
            .mp-match { background:rgba(255,255,255,.2); padding:2px 8px; border-radius:4px; font-size:0.75em; font-weight:700; }
            .mp-career-body { padding:20px 24px; }
            .mp-career-body h5 { font-size:0.8em; text-transform:uppercase; font-weight:700; border-bottom:1px solid #e2e8f0; padding-bottom:6px; }
            .mp-reason { font-style:italic; color:#475569; font-size:0.9em; }
            .mp-roadmap { list-style:none; padding:0; font-size:0.8em; color:#475569; }
            .mp-roadmap li { display:flex; align-items:flex-start; margin-bottom:10px; }
            .mp-step-num { flex-shrink:0; width:20px; height:20px; margin-right:10px; border-radius:50%; background:#eef2ff; color:#4f46e5; font-weight:700; text-align:center; line-height:20px; }
            .mp-explain { background:#0f172a; color:#fff; padding:40px; border-radius:24px; margin:32px 0; }
            .mp-summary { color:#cbd5e1; line-height:1.6; }
            .mp-features { background:rgba(255,255,255,.05); border:1px solid rgba(255,255,255,.1); border-radius:16px; padding:20px; }
            .mp-feature-row { display:flex; justify-content:space-between; font-size:0.75em; margin:12px 0 4px; }
            .mp-footer { text-align:center; color:#64748b; font-size:0.85em; border-top:1px solid #e2e8f0; padding:40px 0; margin-top:40px; }
        """),
        ui.tags.script(src="https://cdn.plot.ly/plotly-2.35.2.min.js")
    ),
    ui.div(
        ui.input_action_link("nav_home", ui.tags.span("MindPath", class_="mp-brand")),
        ui.input_action_button("nav_demo", "Demo", class_="btn-dark"),
        class_="mp-nav"
    ),
    ui.output_ui("main_view"),
    ui.div(
        ui.tags.strong("MindPath AI"),
        ui.p("Empowering career growth through behavioral intelligence."),
        ui.p("Insights are informational only and never a medical or psychological diagnosis."),
        class_="mp-footer"
    ),
    title="MindPath AI"
)


# Server Logic
def server(input, output, session):
    # Initialize client (lazy); a missing key surfaces as a failed analysis
    gemini_client = None

    def get_client():
        nonlocal gemini_client
        if gemini_client is None:
            gemini_client = GeminiClient(api_key=settings.api_key, model=settings.model,
                                         timeout=settings.timeout)
        return gemini_client

    def analyze(text):
        return analyze_behavioral_data(text, get_client())

    state = SessionState(AssessmentController(analyze), has_api_key=settings.has_api_key)

    @reactive.extended_task
    async def analysis_job():
        await state.run()

    @reactive.Effect
    def _on_job_status():
        if analysis_job.status() != "running":
            state.sync()

    @reactive.Effect
    @reactive.event(input.nav_demo)
    def _nav_demo():
        state.start_demo()

    @reactive.Effect
    @reactive.event(input.start_demo)
    def _start_demo():
        state.start_demo()

    @reactive.Effect
    @reactive.event(input.nav_home)
    def _nav_home():
        state.go_home()

    @reactive.Effect
    @reactive.event(input.back_home)
    def _back_home():
        state.go_home()

    # Keep typed text and consent across view changes
    @reactive.Effect
    @reactive.event(input.content_input)
    def _track_text():
        state.update_form(input.content_input(), None)

    @reactive.Effect
    @reactive.event(input.consent)
    def _track_consent():
        state.update_form(None, input.consent())

    @reactive.Effect
    @reactive.event(input.analyze_btn)
    def _submit():
        if state.submit(input.content_input(), input.consent()):
            analysis_job.invoke()

    @reactive.Effect
    @reactive.event(input.cancel_btn)
    def _cancel():
        state.cancel()

    @reactive.Effect
    @reactive.event(input.new_assessment)
    def _new_assessment():
        state.new_assessment()

    @reactive.Effect
    @reactive.event(input.reset_btn)
    def _reset():
        state.reset()

    @output
    @render.ui
    def main_view():
        return state.screen()

    # Export handlers
    @render.download(filename="mindpath_assessment.json")
    def download_json():
        result = state.current_result()
        if result is None:
            return
        yield to_json(result)

    @render.download(filename="mindpath_assessment.csv")
    def download_csv():
        result = state.current_result()
        if result is None:
            return
        yield to_csv(result)


# Create app
app = App(app_ui, server)


if __name__ == "__main__":
    print("Run with: shiny run app.py")
    print("Make sure GEMINI_API_KEY is set in your .env file or environment.")
