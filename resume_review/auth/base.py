from abc import ABC, abstractmethod


class BaseAuthenticator(ABC):
    """Contract for identity providers."""

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """True when the current user is signed in."""
