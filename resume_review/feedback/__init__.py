from resume_review.feedback.instructions import prepare_instructions
from resume_review.feedback.models import Feedback, feedback_to_dict
from resume_review.feedback.parser import parse_feedback, response_text
from resume_review.feedback.validator import validate_and_build

__all__ = [
    "Feedback",
    "feedback_to_dict",
    "parse_feedback",
    "prepare_instructions",
    "response_text",
    "validate_and_build",
]
