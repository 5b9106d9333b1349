# app/schemas/user.py
from typing import Optional
from pydantic import BaseModel, Field

# Fields accepted on PATCH /users/me
class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    profile_image: Optional[str] = None
    theme_mode: Optional[str] = Field(None, pattern="^(light|dark|system)$")
    currency: Optional[str] = Field(None, min_length=3, max_length=3)

    class Config:
        extra = "forbid"

class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str
