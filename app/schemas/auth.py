from pydantic import BaseModel

from app.schemas.profile import NormalizedEmail


class LoginRequest(BaseModel):
    email: NormalizedEmail


class LoginResponse(BaseModel):
    email: str
    name: str
    is_new_user: bool
