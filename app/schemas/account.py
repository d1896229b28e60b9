from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    username: str = Field(default="", alias="usuario")
    email: str = ""
    password: str = ""
    password_confirm: str = Field(default="", alias="passwordConfirm")


class LoginRequest(BaseModel):
    username: str = Field(default="", alias="usuario")
    password: str = ""


class ForgotPasswordRequest(BaseModel):
    email: str = ""


class ResetPasswordRequest(BaseModel):
    email: str = ""
    password: str = ""
    password_confirm: str = Field(default="", alias="passwordConfirm")


class AccountData(BaseModel):
    """Public view of a user row. The password digest is never included."""

    id: int
    username: str = Field(serialization_alias="usuario")
    email: str

    model_config = ConfigDict(from_attributes=True)


class StoreResult(BaseModel):
    success: bool
    message: str | None = None
    data: AccountData | None = None

    @classmethod
    def ok(cls, message: str | None = None, data: AccountData | None = None) -> "StoreResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> "StoreResult":
        return cls(success=False, message=message)
