"""Authentication session for the HalabTours client."""

import base64
import json
import logging
from typing import TYPE_CHECKING, Optional

from ..models.api import AuthResponse, LoginRequest, RegisterRequest, TokenClaims, User

if TYPE_CHECKING:
    from .api_client import TourismApiClient

logger = logging.getLogger(__name__)

ADMIN_ROLE = "ADMIN"


def decode_token_claims(token: str) -> TokenClaims:
    """Read the claims of a JWT without verifying its signature.

    Signature checks belong to the backend; the client only needs the claims
    to know who is signed in. A malformed token yields empty claims.
    """
    try:
        payload = token.split(".")[1]
        payload += "=" * (-len(payload) % 4)
        return TokenClaims.model_validate(json.loads(base64.urlsafe_b64decode(payload)))
    except (IndexError, ValueError) as e:
        logger.warning(f"Could not decode access token claims: {str(e)}")
        return TokenClaims()


class AuthSession:
    """Current user and bearer token, passed to whatever needs them"""

    def __init__(self):
        self.user: Optional[User] = None
        self.access_token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    @property
    def claims(self) -> TokenClaims:
        if self.access_token is None:
            return TokenClaims()
        return decode_token_claims(self.access_token)

    @property
    def is_admin(self) -> bool:
        return self.claims.role == ADMIN_ROLE

    @property
    def admin_id(self) -> Optional[int]:
        claims = self.claims
        return claims.id if claims.role == ADMIN_ROLE else None

    def login(self, response: AuthResponse) -> None:
        self.user = User(id=response.id, name=response.name, email=response.email)
        self.access_token = response.token
        logger.info(f"User {response.id} signed in")

    def logout(self) -> None:
        if self.user is not None:
            logger.info(f"User {self.user.id} signed out")
        self.user = None
        self.access_token = None


class NotAdminError(Exception):
    """Raised when an administrator login resolves to a non-admin account"""


class AuthService:
    """Login, registration and logout against the backend user endpoints"""

    def __init__(self, client: "TourismApiClient", session: AuthSession):
        self.client = client
        self.session = session

    def login(self, email: str, password: str) -> User:
        response = self.client.login(LoginRequest(email=email, password=password))
        self.session.login(response)
        return self.session.user

    def register(self, name: str, email: str, password: str) -> User:
        response = self.client.register(RegisterRequest(name=name, email=email, password=password))
        self.session.login(response)
        return self.session.user

    def admin_login(self, email: str, password: str) -> User:
        """Sign in and require the token to carry the administrator role.

        Raises:
            NotAdminError: If the account is not an administrator. The session
                is cleared before raising.
        """
        user = self.login(email, password)
        if not self.session.is_admin:
            self.session.logout()
            raise NotAdminError(f"Account {email} is not an administrator")
        return user

    def logout(self) -> None:
        self.session.logout()
