"""Granting and revoking admin rights."""
import logging

from api.client import EventsApiClient
from api.errors import NotAuthenticatedError
from storage.session import Session

logger = logging.getLogger(__name__)

GRANT = 'grant'
REVOKE = 'revoke'


class AdminRoleManager:
    """Changes the admin role of other accounts."""

    def __init__(self, client: EventsApiClient, session: Session):
        self.client = client
        self.session = session

    def set_role(self, email: str, action: str) -> dict:
        """
        Apply a role change for an account.

        Args:
            email: Account to change
            action: "grant" or "revoke"

        Returns:
            Decoded server response

        Raises:
            NotAuthenticatedError: If no token is stored (no request is sent)
            ApiError: If the server rejects the change
        """
        token = self.session.get_token()
        if not token:
            logger.warning(f"Role change '{action}' for {email} refused: no token")
            raise NotAuthenticatedError('Login again')

        return self.client.manage_admin(email, action, token)

    def grant(self, email: str) -> dict:
        return self.set_role(email, GRANT)

    def revoke(self, email: str) -> dict:
        return self.set_role(email, REVOKE)
