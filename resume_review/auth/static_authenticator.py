from resume_review.auth.base import BaseAuthenticator


class StaticAuthenticator(BaseAuthenticator):
    """Authenticator with a fixed answer, configured from settings."""

    def __init__(self, authenticated: bool = True) -> None:
        self._authenticated = authenticated

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated
