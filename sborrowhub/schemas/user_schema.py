from typing import Literal, Optional

from pydantic import EmailStr, Field

from sborrowhub.constants import PASSWORD_LENGTH
from sborrowhub.schemas.base import RequestSchema


class SignupSchema(RequestSchema):
    student_id: str = Field(min_length=10, max_length=10)
    firstname: str = Field(min_length=1)
    lastname: str = Field(min_length=1)
    email: EmailStr
    phone_number: str = Field(pattern=r"^\d{11}$")
    college: str = ""
    department: str = ""
    password: str = Field(min_length=PASSWORD_LENGTH)
    confirmpassword: str = Field(min_length=PASSWORD_LENGTH)
    profile_picture: Optional[str] = None


class LoginSchema(RequestSchema):
    user: str = Field(min_length=1)
    password: str = Field(min_length=PASSWORD_LENGTH)


class UpdateProfileSchema(RequestSchema):
    firstname: Optional[str] = Field(default=None, min_length=1)
    lastname: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(default=None, pattern=r"^\d{11}$")
    college: Optional[str] = None
    department: Optional[str] = None
    profile_picture: Optional[str] = None


class ChangePasswordSchema(RequestSchema):
    current_password: str = Field(min_length=1)
    password: str = Field(min_length=PASSWORD_LENGTH)
    confirmpassword: str = Field(min_length=PASSWORD_LENGTH)


class RoleUpdateSchema(RequestSchema):
    role: Literal["user", "officer", "admin"]
