"""Per-session reactive mirror of the assessment controller.

`app.server` creates one of these per browser session and routes every input
event through it; `screen()` is what the main output renders.
"""
import logging
from typing import Callable, Optional

from shiny import reactive, ui

from mindpath.controller import AppState, AssessmentController
from mindpath.errors import MindPathError
from mindpath.models import AssessmentResult
from mindpath.views import dashboard_view, input_view, landing_view, loading_view

logger = logging.getLogger(__name__)


class SessionState:
    def __init__(self, controller: AssessmentController, has_api_key: bool = True):
        self.controller = controller
        self.has_api_key = has_api_key

        self.view = reactive.Value(controller.state)
        self.error_message = reactive.Value(controller.error)
        self.analysis_result = reactive.Value(controller.result)
        # Bumped when the form must be redrawn from controller values
        self.form_version = reactive.Value(0)
        self._form_version = 0

    def sync(self) -> None:
        self.view.set(self.controller.state)
        self.error_message.set(self.controller.error)
        self.analysis_result.set(self.controller.result)

    def redraw_form(self) -> None:
        self._form_version += 1
        self.form_version.set(self._form_version)

    def dispatch(self, event: str, action: Callable[[], None]) -> None:
        try:
            action()
        except MindPathError as e:
            logger.warning("Ignored %s: %s", event, e)
        self.sync()

    def start_demo(self) -> None:
        self.dispatch("start_demo", self.controller.start_demo)

    def go_home(self) -> None:
        self.dispatch("go_home", self.controller.go_home)

    def cancel(self) -> None:
        self.dispatch("cancel", self.controller.cancel)

    def new_assessment(self) -> None:
        self.dispatch("new_assessment", self.controller.new_assessment)

    def reset(self) -> None:
        self.dispatch("reset", self.controller.reset)
        self.redraw_form()

    def update_form(self, text: Optional[str], consent: Optional[bool]) -> None:
        self.controller.update_form(text, consent)

    def submit(self, text: str, consent: bool) -> bool:
        """Validate the form; True when an analysis should be started."""
        try:
            started = self.controller.submit(text, consent)
        except MindPathError as e:
            logger.warning("Ignored submit: %s", e)
            return False
        self.sync()
        return started

    async def run(self) -> None:
        try:
            await self.controller.run()
        finally:
            self.sync()

    def current_result(self) -> Optional[AssessmentResult]:
        return self.analysis_result.get()

    def screen(self) -> ui.Tag:
        state = self.view.get()
        if state is AppState.INPUT:
            self.form_version.get()
            return input_view(self.controller.input_text, self.controller.consent,
                              self.error_message.get(), self.has_api_key)
        if state is AppState.LOADING:
            return loading_view()
        if state is AppState.DASHBOARD:
            result = self.analysis_result.get()
            if result is not None:
                return dashboard_view(result)
        return landing_view()
