from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)


class SessionOut(BaseModel):
    signed_in: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
