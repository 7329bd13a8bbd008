"""Persistence of the bearer token used for privileged API requests."""
import logging
from typing import Optional

from storage.backends import StorageError

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Best-effort store for a single bearer token.

    Storage failures are logged and never raised, so callers that only
    want to attach a token when one exists are not interrupted.
    """

    DEFAULT_KEY = 'authToken'

    def __init__(self, backend, key: str = DEFAULT_KEY):
        """
        Initialize the credential store.

        Args:
            backend: Storage backend with get_item/set_item/remove_item
            key: Name under which the token is stored
        """
        self.backend = backend
        self.key = key

    def set_token(self, token: str) -> None:
        """Persist the token, replacing any previous one."""
        try:
            self.backend.set_item(self.key, token)
        except StorageError as e:
            logger.error(f"Error storing token: {e}")

    def get_token(self) -> Optional[str]:
        """
        Return the stored token.

        Returns:
            Token string, or None if nothing is stored or reading fails
        """
        try:
            return self.backend.get_item(self.key)
        except StorageError as e:
            logger.error(f"Error getting token: {e}")
            return None

    def remove_token(self) -> None:
        """Delete the stored token. Does nothing if there is none."""
        try:
            self.backend.remove_item(self.key)
        except StorageError as e:
            logger.error(f"Error removing token: {e}")
