import asyncio
import json
import threading

import pytest

from conftest import FakeResponse, gemini_body
from mindpath.analysis import analyze_behavioral_data
from mindpath.controller import (
    ANALYSIS_FAILED_ERROR,
    CONSENT_ERROR,
    EMPTY_TEXT_ERROR,
    AppState,
    AssessmentController,
)
from mindpath.errors import AnalysisError, AnalysisInProgressError, InvalidTransitionError
from mindpath.gemini_client import GeminiClient


def on_input(analyzer):
    controller = AssessmentController(analyzer)
    controller.start_demo()
    return controller


def failing(text):
    raise AnalysisError("service unavailable")


def test_starts_on_landing(assessment):
    controller = AssessmentController(lambda text: assessment)
    assert controller.state is AppState.LANDING
    controller.start_demo()
    assert controller.state is AppState.INPUT


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_text_rejected(assessment, text):
    controller = on_input(lambda t: assessment)
    assert controller.submit(text, True) is False
    assert controller.error == EMPTY_TEXT_ERROR
    assert controller.state is AppState.INPUT


def test_empty_text_checked_before_consent(assessment):
    controller = on_input(lambda t: assessment)
    controller.submit("", False)
    assert controller.error == EMPTY_TEXT_ERROR


def test_missing_consent_rejected(assessment):
    controller = on_input(lambda t: assessment)
    assert controller.submit("Busy week at work.", False) is False
    assert controller.error == CONSENT_ERROR
    assert controller.state is AppState.INPUT


def test_valid_submit_moves_to_loading_and_clears_error(assessment):
    controller = on_input(lambda t: assessment)
    controller.submit("", True)
    assert controller.submit("Busy week at work.", True) is True
    assert controller.state is AppState.LOADING
    assert controller.error is None


def test_success_lands_on_dashboard(assessment):
    seen = []

    def analyzer(text):
        seen.append(text)
        return assessment

    controller = on_input(analyzer)
    result = asyncio.run(controller.handle_submit("Busy week at work.", True))

    assert result is assessment
    assert controller.result is assessment
    assert controller.state is AppState.DASHBOARD
    assert seen == ["Busy week at work."]
    assert not controller.in_flight


def test_failure_returns_to_input_with_error():
    controller = on_input(failing)
    result = asyncio.run(controller.handle_submit("Busy week at work.", True))

    assert result is None
    assert controller.state is AppState.INPUT
    assert controller.error == ANALYSIS_FAILED_ERROR
    assert controller.result is None


def test_unparseable_response_returns_to_input(fake_post):
    fake_post.response = FakeResponse(body=gemini_body("<html>not json</html>"))
    client = GeminiClient(api_key="k")
    controller = on_input(lambda text: analyze_behavioral_data(text, client))

    asyncio.run(controller.handle_submit("Busy week at work.", True))

    assert controller.state is AppState.INPUT
    assert controller.error


def test_mocked_response_round_trips_into_result(fake_post, assessment_payload):
    fake_post.response = FakeResponse(body=gemini_body(json.dumps(assessment_payload)))
    client = GeminiClient(api_key="k")
    controller = on_input(lambda text: analyze_behavioral_data(text, client))

    asyncio.run(controller.handle_submit("Busy week at work.", True))

    assert controller.state is AppState.DASHBOARD
    assert controller.result.stress_index == assessment_payload["stressIndex"]
    assert controller.result.emotional_resilience == assessment_payload["emotionalResilience"]
    assert [t.intensity for t in controller.result.trends] == [0.6, 0.8, 0.5]


def test_new_assessment_keeps_typed_text(assessment):
    controller = on_input(lambda t: assessment)
    asyncio.run(controller.handle_submit("Keep me around.", True))

    controller.new_assessment()

    assert controller.state is AppState.INPUT
    assert controller.input_text == "Keep me around."
    assert controller.consent is True


def test_reset_clears_form(assessment):
    controller = on_input(lambda t: assessment)
    asyncio.run(controller.handle_submit("Forget me.", True))

    controller.reset()

    assert controller.state is AppState.INPUT
    assert controller.input_text == ""
    assert controller.consent is False
    assert controller.result is None


def test_new_assessment_only_from_dashboard(assessment):
    controller = on_input(lambda t: assessment)
    with pytest.raises(InvalidTransitionError):
        controller.new_assessment()


def test_submit_outside_input_refused(assessment):
    controller = AssessmentController(lambda t: assessment)
    with pytest.raises(InvalidTransitionError):
        controller.submit("text", True)


class Gate:
    """Analyzer that blocks in its worker thread until released."""

    def __init__(self, result):
        self.result = result
        self.release = threading.Event()
        self.calls = 0

    def __call__(self, text):
        self.calls += 1
        self.release.wait(5)
        return self.result


def test_single_flight(assessment):
    gate = Gate(assessment)
    controller = on_input(gate)

    async def scenario():
        assert controller.submit("text", True)
        first = asyncio.create_task(controller.run())
        await asyncio.sleep(0.05)
        assert controller.in_flight
        with pytest.raises(AnalysisInProgressError):
            await controller.run()
        with pytest.raises(AnalysisInProgressError):
            controller.submit("more text", True)
        gate.release.set()
        return await first

    assert asyncio.run(scenario()) is assessment
    assert gate.calls == 1
    assert controller.state is AppState.DASHBOARD


def test_cancel_discards_result(assessment):
    gate = Gate(assessment)
    controller = on_input(gate)

    async def scenario():
        assert controller.submit("text", True)
        task = asyncio.create_task(controller.run())
        await asyncio.sleep(0.05)
        controller.cancel()
        result = await task
        gate.release.set()
        return result

    assert asyncio.run(scenario()) is None
    assert controller.state is AppState.INPUT
    assert controller.result is None
    assert controller.error is None
    assert not controller.in_flight


def test_go_home_abandons_analysis(assessment):
    gate = Gate(assessment)
    controller = on_input(gate)

    async def scenario():
        assert controller.submit("text", True)
        task = asyncio.create_task(controller.run())
        await asyncio.sleep(0.05)
        controller.go_home()
        await task
        gate.release.set()

    asyncio.run(scenario())
    assert controller.state is AppState.LANDING
    assert controller.result is None


def test_caller_cancellation_propagates(assessment):
    gate = Gate(assessment)
    controller = on_input(gate)

    async def scenario():
        assert controller.submit("text", True)
        task = asyncio.create_task(controller.run())
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        gate.release.set()

    asyncio.run(scenario())
    assert controller.state is AppState.INPUT
    assert controller.result is None


def test_cancel_requires_loading(assessment):
    controller = on_input(lambda t: assessment)
    with pytest.raises(InvalidTransitionError):
        controller.cancel()


def test_typed_text_survives_navigation(assessment):
    controller = on_input(lambda t: assessment)
    controller.update_form("Half-written draft", None)
    controller.update_form(None, True)

    controller.go_home()
    controller.start_demo()

    assert controller.input_text == "Half-written draft"
    assert controller.consent is True


def test_form_updates_ignored_while_loading(assessment):
    controller = on_input(lambda t: assessment)
    assert controller.submit("Submitted text", True)
    controller.update_form("late keystroke", False)
    assert controller.input_text == "Submitted text"
    assert controller.consent is True


class Gates:
    """Analyzer whose n-th call blocks until its own event is set."""

    def __init__(self, result, count):
        self.result = result
        self.events = [threading.Event() for _ in range(count)]
        self.texts = []

    def __call__(self, text):
        index = len(self.texts)
        self.texts.append(text)
        self.events[index].wait(5)
        return self.result


def test_resubmit_right_after_cancel(assessment):
    gates = Gates(assessment, 2)
    controller = on_input(gates)

    async def scenario():
        assert controller.submit("first", True)
        first = asyncio.create_task(controller.run())
        await asyncio.sleep(0.05)
        controller.cancel()
        assert not controller.in_flight

        assert controller.submit("second", True)
        second = asyncio.create_task(controller.run())
        assert await first is None
        # The abandoned run must not touch the new one
        assert controller.state is AppState.LOADING
        assert controller.error is None

        gates.events[1].set()
        result = await second
        gates.events[0].set()
        return result

    assert asyncio.run(scenario()) is assessment
    assert controller.state is AppState.DASHBOARD
    assert controller.result is assessment
