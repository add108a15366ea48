class FeedbackError(Exception):
    """Base exception for feedback handling."""


class FeedbackFormatError(FeedbackError):
    """Raised when response text is not the expected structured feedback."""


class InstructionsError(FeedbackError):
    """Raised when the bundled instruction template cannot be loaded or filled."""
