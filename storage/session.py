"""Current user session shared by the repository and role manager."""
import logging
from typing import Optional

from storage.credential_store import CredentialStore

logger = logging.getLogger(__name__)


class Session:
    """Session holding the signed-in user's credential."""

    def __init__(self, store: CredentialStore):
        self.store = store

    def get_token(self) -> Optional[str]:
        return self.store.get_token()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.get_token())

    def login(self, token: str) -> None:
        """Remember the token issued at login."""
        self.store.set_token(token)
        logger.info("Session token stored")

    def logout(self) -> None:
        self.store.remove_token()
        logger.info("Session token removed")
