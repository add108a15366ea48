class InferenceError(Exception):
    """Raised when a feedback request fails."""


class InferenceNetworkError(InferenceError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
