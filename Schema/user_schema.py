import re
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, validator

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


class LoginRequest(BaseModel):
    email: str
    password: str

    @validator('email')
    def validate_email(cls, v):
        if not is_valid_email(v):
            raise ValueError('Invalid email format')
        return v


class AccountBase(BaseModel):
    """Fields every login-capable account shares"""
    email: str
    password: str = ""
    account_status: str = Field("", alias="accountStatus")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")

    class Config:
        populate_by_name = True

    @property
    def is_active(self) -> bool:
        return self.account_status.lower() == "active"

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Employee(AccountBase):
    employee_id: int = Field(alias="employeeId")
    manager_id: Optional[int] = Field(None, alias="managerId")
    dob: Optional[str] = None
    contact_number: Optional[str] = Field(None, alias="contactNumber")

    @validator('dob', pre=True)
    def validate_dob(cls, v):
        if isinstance(v, date):
            return v.isoformat()
        return v


class Manager(AccountBase):
    manager_id: int = Field(alias="managerId")


class Hr(AccountBase):
    hr_id: int = Field(alias="hrId")
