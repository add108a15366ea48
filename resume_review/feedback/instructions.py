from pathlib import Path

from resume_review.feedback.exceptions import InstructionsError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the feedback prompt template.

    Args:
        path: Path to the template file.
              Defaults to the bundled feedback_prompt.txt.

    Raises:
        InstructionsError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "feedback_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InstructionsError(f"Failed to load prompt template: {exc}") from exc


def load_response_format(path: Path | None = None) -> str:
    """Load the response-format description sent along with the prompt.

    Raises:
        InstructionsError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "feedback_format.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InstructionsError(f"Failed to load response format: {exc}") from exc


def prepare_instructions(
    job_title: str,
    job_description: str,
    *,
    template_path: Path | None = None,
    response_format_path: Path | None = None,
) -> str:
    """Fill the prompt template with the job context and response format."""
    template = load_prompt_template(template_path)
    try:
        return template.format(
            job_title=job_title,
            job_description=job_description,
            response_format=load_response_format(response_format_path),
        )
    except (KeyError, IndexError, ValueError) as exc:
        raise InstructionsError(f"Invalid prompt template: {exc}") from exc
