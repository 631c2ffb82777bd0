from pydantic import EmailStr, Field

from eduhub.models import UserRole
from eduhub.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)


class Identity(CamelModel):
    """Who is behind a session token."""

    id: int
    email: str
    first_name: str
    last_name: str
    role: UserRole

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserListItem(CamelModel):
    id: int
    name: str
    email: str
    role: UserRole
