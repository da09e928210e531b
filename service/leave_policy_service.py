from datetime import date, datetime
from typing import Optional, Tuple
from pydantic import BaseModel, ValidationError
from Schema.leave_management_schema import LeaveQuota, LEAVE_TYPES

MAX_LEAVES_PER_MONTH = 4
MAX_LEAVES_PER_YEAR = 20
MAX_CONTINUOUS_DAYS = 5

MONTHLY_QUOTA_EXHAUSTED = "monthly quota exhausted"
YEARLY_QUOTA_EXHAUSTED = "yearly quota exhausted"
START_DATE_IN_PAST = "start date in past"
END_DATE_IN_PAST = "end date in past"
END_BEFORE_START = "end before start"
SPAN_TOO_LONG = "span too long"
INVALID_LEAVE_TYPE = "invalid leave type"
INVALID_LEAVE_COUNT = "invalid leave count"
INVALID_DATE = "invalid date"


class Decision(BaseModel):
    """Outcome of a policy check: allowed (with optional remaining counts) or rejected with a reason"""
    allowed: bool
    reason: Optional[str] = None
    remaining: Optional[int] = None
    remaining_month: Optional[int] = None
    remaining_year: Optional[int] = None

    @classmethod
    def allow(cls, remaining: Optional[int] = None, **kwargs) -> "Decision":
        return cls(allowed=True, remaining=remaining, **kwargs)

    @classmethod
    def reject(cls, reason: str) -> "Decision":
        return cls(allowed=False, reason=reason)

    @property
    def rejected(self) -> bool:
        return not self.allowed


class LeaveEligibilityValidator:
    """Quota and date rules applied to a leave request before it is submitted.

    Every check is a pure function of its arguments. Bad input is reported as a
    rejected Decision rather than an exception.
    """

    def __init__(
        self,
        max_per_month: int = MAX_LEAVES_PER_MONTH,
        max_per_year: int = MAX_LEAVES_PER_YEAR,
        max_continuous_days: int = MAX_CONTINUOUS_DAYS,
    ):
        self.max_per_month = max_per_month
        self.max_per_year = max_per_year
        self.max_continuous_days = max_continuous_days

    @staticmethod
    def _check_quota(used, limit: int, exhausted_reason: str) -> Decision:
        if not isinstance(used, int) or isinstance(used, bool) or used < 0:
            return Decision.reject(INVALID_LEAVE_COUNT)
        if used >= limit:
            return Decision.reject(exhausted_reason)
        return Decision.allow(remaining=limit - used)

    def check_monthly_quota(self, monthly_used: int) -> Decision:
        return self._check_quota(monthly_used, self.max_per_month, MONTHLY_QUOTA_EXHAUSTED)

    def check_yearly_quota(self, yearly_used: int) -> Decision:
        return self._check_quota(yearly_used, self.max_per_year, YEARLY_QUOTA_EXHAUSTED)

    def validate_interval(self, today: date, start_date: date, end_date: date) -> Decision:
        """Checks run in a fixed order so the first violation reported is always the same:
        past start, past end, end before start, then span length.
        """
        if not all(isinstance(d, date) for d in (today, start_date, end_date)):
            return Decision.reject(INVALID_DATE)
        today, start_date, end_date = (
            d.date() if isinstance(d, datetime) else d for d in (today, start_date, end_date)
        )

        if start_date < today:
            return Decision.reject(START_DATE_IN_PAST)
        if end_date < today:
            return Decision.reject(END_DATE_IN_PAST)
        if end_date < start_date:
            return Decision.reject(END_BEFORE_START)

        days_between = (end_date - start_date).days
        if days_between >= self.max_continuous_days:
            return Decision.reject(SPAN_TOO_LONG)
        return Decision.allow()

    @staticmethod
    def validate_leave_type(candidate: str) -> bool:
        if not isinstance(candidate, str):
            return False
        return candidate.strip().lower() in {t.lower() for t in LEAVE_TYPES}

    def evaluate(
        self,
        quota: LeaveQuota,
        interval: Tuple[date, date],
        leave_type: str,
        today: date,
    ) -> Decision:
        if not isinstance(quota, LeaveQuota):
            try:
                quota = LeaveQuota.model_validate(quota)
            except ValidationError:
                return Decision.reject(INVALID_LEAVE_COUNT)

        monthly = self.check_monthly_quota(quota.monthly_used)
        if monthly.rejected:
            return monthly

        yearly = self.check_yearly_quota(quota.yearly_used)
        if yearly.rejected:
            return yearly

        try:
            start_date, end_date = interval
        except (TypeError, ValueError):
            return Decision.reject(INVALID_DATE)

        dates = self.validate_interval(today, start_date, end_date)
        if dates.rejected:
            return dates

        if not self.validate_leave_type(leave_type):
            return Decision.reject(INVALID_LEAVE_TYPE)

        return Decision.allow(remaining_month=monthly.remaining, remaining_year=yearly.remaining)
