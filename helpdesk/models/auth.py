from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from .account import Account

Email = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class RegisterPayload(BaseModel):
    name: Name
    email: Email
    password: str = Field(..., min_length=1)


class LoginPayload(BaseModel):
    email: Email
    password: str = Field(..., min_length=1)


class AccountResponse(BaseModel):
    """API-safe representation of an account (no password hash)."""

    id: str
    name: str
    email: str

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(id=account.id, name=account.name, email=account.email)


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class LoginResponse(MessageResponse):
    token: str
    token_type: str = "bearer"
    user: AccountResponse


class VerifyResponse(BaseModel):
    success: bool = True
    user: AccountResponse
