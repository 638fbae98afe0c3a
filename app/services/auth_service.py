# app/services/auth_service.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from .base_service import BaseService
from ..core.exceptions import AuthenticationFailedException
from ..core.security import create_access_token, verify_password
from ..models.user import User
from ..schemas.auth_schemas import AuthenticationRequest, AuthenticationResponse

logger = logging.getLogger(__name__)


class AuthenticationService(BaseService[User]):
    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def authenticate(self, credentials: AuthenticationRequest) -> AuthenticationResponse:
        """Check username and password, issue a token carrying the user's role"""
        user = await self.get_by_field("username", credentials.username)
        if user is None or not verify_password(credentials.password, user.password):
            logger.warning(f"Failed login attempt for username={credentials.username}")
            raise AuthenticationFailedException()

        if not user.is_active:
            raise AuthenticationFailedException("Account is disabled")

        token = create_access_token(subject=user.username, role=user.role.value)
        return AuthenticationResponse(firstname=user.firstname, lastname=user.lastname, token=token)
