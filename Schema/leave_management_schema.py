from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field, validator

LEAVE_TYPES = ("CasualLeave", "SickLeave", "Comp-off")
WIRE_DATE_SUFFIX = "T00:00:00.000Z"


def parse_wire_date(value):
    """Accept 'yyyy-MM-dd' or an ISO timestamp such as '2024-06-12T00:00:00.000Z'"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    return value


def canonical_leave_type(candidate: str) -> str:
    """Map a case-insensitive leave type onto its canonical spelling"""
    for leave_type in LEAVE_TYPES:
        if leave_type.lower() == candidate.strip().lower():
            return leave_type
    raise ValueError(f"Invalid leave type '{candidate}'")


# Pydantic Models
class LeaveQuota(BaseModel):
    monthly_used: int = 0
    yearly_used: int = 0


class LeaveApplicationCreate(BaseModel):
    """In-memory draft of a leave request, handed to the submission API once accepted"""
    employee_id: int
    manager_id: int
    leave_type: str
    start_date: date
    end_date: date
    reason: str
    status: str = "pending"

    @validator('reason')
    def validate_reason(cls, v):
        if not v or len(v.strip()) == 0:
            raise ValueError('Reason cannot be empty')
        return v.strip()

    def to_payload(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "managerId": self.manager_id,
            "startDate": f"{self.start_date.isoformat()}{WIRE_DATE_SUFFIX}",
            "endDate": f"{self.end_date.isoformat()}{WIRE_DATE_SUFFIX}",
            "leaveType": self.leave_type,
            "reason": self.reason,
            "status": self.status,
        }


class LeaveApplicationResponse(BaseModel):
    """A leave record as returned by the leave management API"""
    leave_id: int = Field(alias="leaveId")
    employee_id: int = Field(alias="employeeId")
    manager_id: Optional[int] = Field(None, alias="managerId")
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    leave_type: str = Field(alias="leaveType")
    reason: Optional[str] = ""
    status: Optional[str] = "pending"

    class Config:
        populate_by_name = True

    @validator('start_date', 'end_date', pre=True)
    def validate_dates(cls, v):
        return parse_wire_date(v)


LeaveRecord = LeaveApplicationResponse


class LeaveStatusUpdate(BaseModel):
    leave_id: int
    action: str

    @validator('action')
    def validate_action(cls, v):
        action = v.strip().upper()
        if action not in ("A", "R"):
            raise ValueError("Action must be 'A' (approve) or 'R' (reject)")
        return action

    @property
    def status(self) -> str:
        return "approved" if self.action == "A" else "rejected"
