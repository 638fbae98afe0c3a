from typing import Optional
from pydantic import BaseModel, Field


class AuthenticationRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthenticationResponse(BaseModel):
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    token: str
