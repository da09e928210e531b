import logging
from datetime import date
from typing import Callable, Optional
from Schema.leave_management_schema import LeaveApplicationCreate, LEAVE_TYPES, canonical_leave_type
from Schema.user_schema import Employee
from service.leave_policy_service import (
    LeaveEligibilityValidator,
    MONTHLY_QUOTA_EXHAUSTED,
    YEARLY_QUOTA_EXHAUSTED,
    START_DATE_IN_PAST,
    END_DATE_IN_PAST,
    END_BEFORE_START,
    SPAN_TOO_LONG,
    INVALID_LEAVE_TYPE,
    MAX_CONTINUOUS_DAYS,
)
from service.leave_service import LeaveService
from utils.app_config import MailSettings
from utils.exceptions import LeaveApiError
from utils.mail_config_utils import leave_submitted_message, send_leave_email
from utils.prompt_utils import Console
from utils.table_utils import MY_LEAVE_HEADERS, leave_rows

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Leave application process canceled."

REJECTION_MESSAGES = {
    MONTHLY_QUOTA_EXHAUSTED: "You have already applied for the maximum allowed leaves this month.",
    YEARLY_QUOTA_EXHAUSTED: "You have exhausted all your leaves for this year.",
    START_DATE_IN_PAST: "You have entered a past date. Please enter a current or future date.",
    END_DATE_IN_PAST: "You have entered a past date for the end date. Please enter a current or future date.",
    END_BEFORE_START: "End date must be after the start date.",
    SPAN_TOO_LONG: f"You cannot apply for leave for {MAX_CONTINUOUS_DAYS} or more continuous days.",
    INVALID_LEAVE_TYPE: f"Invalid leave type. Please enter {', '.join(LEAVE_TYPES[:-1])}, or {LEAVE_TYPES[-1]}.",
}


def rejection_message(reason: Optional[str]) -> str:
    return REJECTION_MESSAGES.get(reason, f"Leave application rejected: {reason}")


class EmployeeMenu:
    """Apply for leave and browse one's own leave history"""

    def __init__(
        self,
        employee: Employee,
        console: Console,
        leave_service: LeaveService,
        mail_settings: Optional[MailSettings] = None,
        validator: Optional[LeaveEligibilityValidator] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.employee = employee
        self.console = console
        self.leave_service = leave_service
        self.mail_settings = mail_settings
        self.validator = validator or LeaveEligibilityValidator()
        self.clock = clock

    def run(self):
        actions = {
            1: self.apply_for_leave,
            2: self.view_leaves,
            3: self.view_leaves_in_time_period,
        }
        while True:
            self.console.show("Employee Menu:")
            self.console.show("1. Apply for leave")
            self.console.show("2. View my leaves")
            self.console.show("3. View leaves in a specific time period")
            self.console.show("4. Logout")

            choice = self.console.ask_choice()
            if choice is None:
                continue
            if choice == 4:
                self.console.show("Logging out.")
                return
            action = actions.get(choice)
            if action is None:
                self.console.show("Invalid choice.")
                continue
            action()

    def _reject(self, reason: Optional[str]) -> bool:
        logger.info("Leave application rejected", extra={"employee_id": self.employee.employee_id, "reason": reason})
        self.console.show(rejection_message(reason))
        return False

    def _cancel(self) -> bool:
        self.console.show(CANCELLED_MESSAGE)
        return False

    def apply_for_leave(self) -> bool:
        """Walk the employee through a leave application. Returns True once the API accepted it."""
        console = self.console
        console.show("Leave Application Process:")
        console.show("Enter 'E' at any time to exit the leave application process.")

        if self.employee.manager_id is None:
            console.show("No reporting manager is assigned to your account. Please contact HR.")
            return False

        today = self.clock()
        quota = self.leave_service.get_quota(self.employee.employee_id, today)

        monthly = self.validator.check_monthly_quota(quota.monthly_used)
        if monthly.rejected:
            return self._reject(monthly.reason)
        console.show(f"You have {monthly.remaining} leave(s) remaining this month.")

        yearly = self.validator.check_yearly_quota(quota.yearly_used)
        if yearly.rejected:
            return self._reject(yearly.reason)
        console.show(f"You have {yearly.remaining} leave(s) remaining this year.")

        start = console.ask_date("Enter the start date (YYYY-MM-DD) (or 'E' to exit): ")
        if start.cancelled:
            return self._cancel()
        end = console.ask_date("Enter the end date (YYYY-MM-DD) (or 'E' to exit): ")
        if end.cancelled:
            return self._cancel()

        interval = self.validator.validate_interval(today, start.value, end.value)
        if interval.rejected:
            return self._reject(interval.reason)

        while True:
            leave_type = console.ask(f"Enter the leave type ({', '.join(LEAVE_TYPES[:-1])}, or {LEAVE_TYPES[-1]}) (or 'E' to exit): ")
            if leave_type.cancelled:
                return self._cancel()
            if self.validator.validate_leave_type(leave_type.value):
                break
            console.show(rejection_message(INVALID_LEAVE_TYPE))

        while True:
            reason = console.ask("Enter the reason (or 'E' to exit): ")
            if reason.cancelled:
                return self._cancel()
            if reason.value:
                break
            console.show("Reason cannot be empty.")

        decision = self.validator.evaluate(quota, (start.value, end.value), leave_type.value, today)
        if decision.rejected:
            return self._reject(decision.reason)

        draft = LeaveApplicationCreate(
            employee_id=self.employee.employee_id,
            manager_id=self.employee.manager_id,
            leave_type=canonical_leave_type(leave_type.value),
            start_date=start.value,
            end_date=end.value,
            reason=reason.value,
        )

        try:
            self.leave_service.submit_leave(draft)
        except LeaveApiError as exc:
            console.show(str(exc))
            return False

        console.show("Leave application submitted successfully.")
        send_leave_email(self.mail_settings, leave_submitted_message(draft))
        return True

    def _show_leaves(self, fetch, title: str, empty_message: str):
        try:
            leaves = fetch()
        except LeaveApiError as exc:
            self.console.show(str(exc))
            return
        if not leaves:
            self.console.show(empty_message)
            return
        self.console.show(title)
        self.console.show_table(MY_LEAVE_HEADERS, leave_rows(leaves, include_employee=False))

    def view_leaves(self):
        self._show_leaves(
            lambda: self.leave_service.get_employee_leaves(self.employee.employee_id),
            "Your Leave Applications:",
            "No leave applications found.",
        )

    def view_leaves_in_time_period(self):
        period = self.console.ask_period()
        if period.cancelled:
            return
        start_date, end_date = period.value
        self._show_leaves(
            lambda: self.leave_service.get_employee_leaves_in_period(self.employee.employee_id, start_date, end_date),
            "Your Leave Applications in the specified time period:",
            "No leave applications in the specified time period.",
        )
