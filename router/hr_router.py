from Schema.user_schema import Hr
from service.leave_service import LeaveService
from service.user_service import UserService
from utils.exceptions import LeaveApiError
from utils.prompt_utils import Console
from utils.table_utils import EMPLOYEE_DETAIL_HEADERS, LEAVE_HEADERS, employee_rows, leave_rows


class HrMenu:
    def __init__(self, hr: Hr, console: Console, leave_service: LeaveService, user_service: UserService):
        self.hr = hr
        self.console = console
        self.leave_service = leave_service
        self.user_service = user_service

    def run(self):
        self.console.show("Welcome to HRs portal")
        self.console.show(f"Your ID is: {self.hr.hr_id}")
        while True:
            self.console.show("HR Actions:")
            self.console.show("1. Get List of All Employees with Details")
            self.console.show("2. Get List of All Leaves with Details During the Specified Time Period")
            self.console.show("3. Logout")

            choice = self.console.ask_choice()
            if choice is None:
                continue
            if choice == 1:
                self.list_all_employees()
            elif choice == 2:
                self.list_leaves_in_time_period()
            elif choice == 3:
                self.console.show("Logging out...")
                return
            else:
                self.console.show("Invalid choice. Please enter a valid option.")

    def list_all_employees(self):
        try:
            employees = self.user_service.get_all_employees()
        except LeaveApiError as exc:
            self.console.show(str(exc))
            return
        if not employees:
            self.console.show("No employees found.")
            return
        self.console.show("List of All Employees with Details:")
        self.console.show_table(EMPLOYEE_DETAIL_HEADERS, employee_rows(employees, include_manager=True))

    def list_leaves_in_time_period(self):
        period = self.console.ask_period()
        if period.cancelled:
            return
        start_date, end_date = period.value
        try:
            leaves = self.leave_service.get_all_leaves_in_period(start_date, end_date)
        except LeaveApiError as exc:
            self.console.show(str(exc))
            return
        if not leaves:
            self.console.show("No leave applications in the specified time period.")
            return
        self.console.show("Leave Applications in the specified time period:")
        self.console.show_table(LEAVE_HEADERS, leave_rows(leaves))
