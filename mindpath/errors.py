"""Exceptions raised by the MindPath analysis pipeline."""


class MindPathError(Exception):
    """Base class for MindPath errors."""


class AnalysisError(MindPathError):
    """The external model call failed or returned an unusable document."""


class AnalysisInProgressError(MindPathError):
    """An analysis is already outstanding for this controller."""


class InvalidTransitionError(MindPathError):
    """The requested event is not allowed in the current view state."""

    def __init__(self, event: str, state):
        super().__init__(f"Cannot {event} while in state {state.value}")
        self.event = event
        self.state = state
