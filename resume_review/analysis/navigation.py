from abc import ABC, abstractmethod
from urllib.parse import quote

from resume_review.logging.logger import Log


def review_path(record_id: str) -> str:
    """Path of the review view for a record: /resume/<id>"""
    return f"/resume/{quote(record_id, safe='')}"


def login_path(next_path: str) -> str:
    return f"/auth?next={next_path}"


class BaseNavigator(ABC):
    """Moves the user to another view."""

    @abstractmethod
    def navigate(self, path: str) -> None:
        """Transition to ``path``."""


class RecordingNavigator(BaseNavigator):
    """Remembers every path it was asked to open."""

    def __init__(self) -> None:
        self.visited: list[str] = []

    def navigate(self, path: str) -> None:
        Log.info(f"Navigating to {path}")
        self.visited.append(path)
