from pydantic import BaseModel

from jobboard.schemas.user import User


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthPayload(Token):
    user: User
