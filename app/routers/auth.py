from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..schemas.auth_schemas import AuthenticationRequest, AuthenticationResponse
from ..services.auth_service import AuthenticationService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/authenticate", response_model=AuthenticationResponse)
async def authenticate(
    credentials: AuthenticationRequest,
    db: AsyncSession = Depends(get_db)
):
    """Exchange username and password for a bearer token"""
    service = AuthenticationService(db)
    return await service.authenticate(credentials)
