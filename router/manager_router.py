import logging
from typing import Optional
from pydantic import ValidationError
from Schema.leave_management_schema import LeaveStatusUpdate
from Schema.user_schema import Manager
from service.leave_service import LeaveService
from service.user_service import UserService
from utils.app_config import MailSettings
from utils.exceptions import LeaveApiError
from utils.mail_config_utils import leave_decision_message, send_leave_email
from utils.prompt_utils import Console
from utils.table_utils import EMPLOYEE_HEADERS, LEAVE_HEADERS, employee_rows, leave_rows

logger = logging.getLogger(__name__)


class ManagerMenu:
    """Review and decide on the leave requests of a manager's reports"""

    def __init__(
        self,
        manager: Manager,
        console: Console,
        leave_service: LeaveService,
        user_service: UserService,
        mail_settings: Optional[MailSettings] = None,
    ):
        self.manager = manager
        self.console = console
        self.leave_service = leave_service
        self.user_service = user_service
        self.mail_settings = mail_settings

    def run(self):
        self.console.show("Welcome to Managers portal")
        self.console.show(f"Your ID is: {self.manager.manager_id}")
        actions = {
            1: self.approve_or_reject_leave,
            2: self.list_employees,
            3: self.list_leave_requests,
            4: self.view_leaves_in_time_period,
        }
        while True:
            self.console.show("Manager Actions:")
            self.console.show("1. Approve/Reject Leave Applications")
            self.console.show("2. See List of Employees Reporting to You")
            self.console.show("3. See Leave Requests from Your Employees")
            self.console.show("4. View leaves in specific time period")
            self.console.show("5. Logout")

            choice = self.console.ask_choice()
            if choice is None:
                continue
            if choice == 5:
                self.console.show("Logging out...")
                return
            action = actions.get(choice)
            if action is None:
                self.console.show("Invalid choice. Please enter a valid option.")
                continue
            action()

    def approve_or_reject_leave(self) -> bool:
        console = self.console
        try:
            leaves = self.leave_service.get_pending_leaves_for_manager(self.manager.manager_id)
        except LeaveApiError as exc:
            console.show(str(exc))
            return False

        if not leaves:
            console.show("No leave applications for approval/rejection.")
            return False

        console.show("Leave Applications for Approval/Rejection:")
        console.show_table(LEAVE_HEADERS, leave_rows(leaves))
        leave_ids = {leave.leave_id for leave in leaves}

        while True:
            answer = console.ask("Enter the Leave ID you want to approve/reject (0 to cancel): ")
            if answer.cancelled:
                console.show("Operation canceled.")
                return False
            try:
                leave_id = int(answer.value)
            except ValueError:
                console.show("Invalid input. Please enter a valid Leave ID or 0 to cancel.")
                continue

            if leave_id == 0:
                console.show("Operation canceled.")
                return False
            if leave_id not in leave_ids:
                console.show("Invalid Leave ID. Please enter a valid Leave ID or 0 to cancel.")
                continue

            action = console.ask("Enter 'A' to approve or 'R' to reject (or 'E' to exit): ")
            if action.cancelled:
                console.show("Operation canceled.")
                return False
            try:
                update = LeaveStatusUpdate(leave_id=leave_id, action=action.value)
            except ValidationError:
                console.show("Invalid action. Please enter 'A' to approve or 'R' to reject.")
                continue
            break

        try:
            self.leave_service.submit_leave_decision(update)
        except LeaveApiError as exc:
            console.show(str(exc))
            return False

        custom_message = console.read("Enter the message (Optional): ")
        send_leave_email(self.mail_settings, leave_decision_message(update.status, custom_message))
        logger.info("Leave status updated", extra={"leave_id": update.leave_id, "new_status": update.status})
        console.show("Leave status updated successfully.")
        return True

    def list_employees(self):
        try:
            employees = self.user_service.get_employees_reporting_to(self.manager.manager_id)
        except LeaveApiError as exc:
            self.console.show(str(exc))
            return
        if not employees:
            self.console.show("No employees reporting to you.")
            return
        self.console.show("Employees Reporting to You:")
        self.console.show_table(EMPLOYEE_HEADERS, employee_rows(employees))

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
        self.console.show_table(LEAVE_HEADERS, leave_rows(leaves))

    def list_leave_requests(self):
        self._show_leaves(
            lambda: self.leave_service.get_leave_requests_for_manager(self.manager.manager_id),
            "Leave Requests from Your Employees:",
            "No leave requests from your employees.",
        )

    def view_leaves_in_time_period(self):
        period = self.console.ask_period()
        if period.cancelled:
            return
        start_date, end_date = period.value
        self._show_leaves(
            lambda: self.leave_service.get_manager_leaves_in_period(self.manager.manager_id, start_date, end_date),
            "Leave Requests within the Time Period:",
            "No leave requests within the specified time period.",
        )
