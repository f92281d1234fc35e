"""View state machine for the single-page assessment flow.

The controller owns everything that changes while a user works through the
app: the active view, the typed text, the consent flag, the most recent
result or error, and the one outstanding analysis task. It has no Shiny
dependency so it can be driven directly from tests.
"""
import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Set

from mindpath.errors import AnalysisInProgressError, InvalidTransitionError
from mindpath.models import AssessmentResult

logger = logging.getLogger(__name__)

EMPTY_TEXT_ERROR = "Please provide some text for analysis."
CONSENT_ERROR = "You must consent to the analysis to proceed."
ANALYSIS_FAILED_ERROR = "Analysis failed. Please try again later."

Analyzer = Callable[[str], AssessmentResult]


class AppState(Enum):
    LANDING = "LANDING"
    INPUT = "INPUT"
    LOADING = "LOADING"
    DASHBOARD = "DASHBOARD"


class AssessmentController:
    """Finite-state controller: LANDING -> INPUT -> LOADING -> DASHBOARD."""

    def __init__(self, analyzer: Analyzer):
        self.analyzer = analyzer
        self.state = AppState.LANDING
        self.input_text = ""
        self.consent = False
        self.result: Optional[AssessmentResult] = None
        self.error: Optional[str] = None
        self._task: Optional[asyncio.Future] = None
        self._abandoned: Set[asyncio.Future] = set()

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def _transition(self, event: str, target: AppState) -> None:
        logger.debug("%s: %s -> %s", event, self.state.value, target.value)
        self.state = target

    def start_demo(self) -> None:
        if self.state is AppState.LOADING:
            raise InvalidTransitionError("start demo", self.state)
        self._transition("start_demo", AppState.INPUT)

    def go_home(self) -> None:
        """Return to the landing page, abandoning any outstanding analysis."""
        self._abandon()
        self._transition("go_home", AppState.LANDING)

    def submit(self, text: str, consent: bool) -> bool:
        """Validate the form and move to LOADING.

        Returns False (with `error` set) when the text is blank or consent is
        missing; the view does not change in that case.
        """
        if self.state is AppState.LOADING or self.in_flight:
            raise AnalysisInProgressError("An analysis is already running")
        if self.state is not AppState.INPUT:
            raise InvalidTransitionError("submit", self.state)

        self.input_text = text or ""
        self.consent = bool(consent)

        if not self.input_text.strip():
            self.error = EMPTY_TEXT_ERROR
            return False
        if not self.consent:
            self.error = CONSENT_ERROR
            return False

        self.error = None
        self._transition("submit", AppState.LOADING)
        return True

    async def run(self) -> Optional[AssessmentResult]:
        """Run the analysis for the submitted text.

        The blocking analyzer runs in a worker thread. Only one run may be
        outstanding; a cancelled run never stores its result.
        """
        if self.in_flight:
            raise AnalysisInProgressError("An analysis is already running")
        if self.state is not AppState.LOADING:
            raise InvalidTransitionError("run analysis", self.state)

        task = asyncio.ensure_future(asyncio.to_thread(self.analyzer, self.input_text))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if self._discard(task):
                return None
            # The caller's own task was cancelled
            if self.state is AppState.LOADING:
                self._transition("analysis_cancelled", AppState.INPUT)
            raise
        except Exception:
            if self._discard(task):
                return None
            logger.exception("Behavioral analysis failed")
            self.error = ANALYSIS_FAILED_ERROR
            self._transition("analysis_failed", AppState.INPUT)
            return None
        finally:
            if self._task is task:
                self._task = None

        # Finished just before it was abandoned
        if self._discard(task):
            return None

        self.result = result
        self.error = None
        self._transition("analysis_succeeded", AppState.DASHBOARD)
        return result

    async def handle_submit(self, text: str, consent: bool) -> Optional[AssessmentResult]:
        """Submit and, if the form is valid, run the analysis to completion."""
        if not self.submit(text, consent):
            return None
        return await self.run()

    def cancel(self) -> None:
        """Abandon the outstanding analysis and go back to the input form."""
        if self.state is not AppState.LOADING:
            raise InvalidTransitionError("cancel", self.state)
        self._abandon()
        self._transition("cancel", AppState.INPUT)

    def new_assessment(self) -> None:
        """Back to the form from the dashboard; typed text is kept."""
        if self.state is not AppState.DASHBOARD:
            raise InvalidTransitionError("start a new assessment", self.state)
        self._transition("new_assessment", AppState.INPUT)

    def reset(self) -> None:
        """Clear the form and the last result."""
        if self.state is AppState.LOADING:
            raise InvalidTransitionError("reset", self.state)
        self.input_text = ""
        self.consent = False
        self.result = None
        self.error = None
        self._transition("reset", AppState.INPUT)

    def update_form(self, text: Optional[str], consent: Optional[bool]) -> None:
        """Record what the user has typed so far; ignored while loading."""
        if self.state is AppState.LOADING:
            return
        if text is not None:
            self.input_text = text
        if consent is not None:
            self.consent = bool(consent)

    def _abandon(self) -> None:
        task = self._task
        if task is None:
            return
        # Free the slot now; the abandoned run discards its own result
        self._task = None
        self._abandoned.add(task)
        task.cancel()
        logger.info("Analysis cancelled; the in-flight result will be discarded")

    def _discard(self, task: asyncio.Future) -> bool:
        if task in self._abandoned:
            self._abandoned.discard(task)
            return True
        return False
