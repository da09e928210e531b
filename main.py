import logging
from datetime import date
from typing import Callable, Optional
from router.hr_router import HrMenu
from router.leave_management_router import EmployeeMenu
from router.manager_router import ManagerMenu
from router.user_router import login
from service.leave_service import LeaveService
from service.user_service import UserService
from utils.app_config import AppConfig, load_config
from utils.prompt_utils import Console

logger = logging.getLogger(__name__)


class LeaveManagementClient:
    """Top-level menu: pick a role, log in, then hand over to that role's menu"""

    def __init__(
        self,
        config: AppConfig,
        console: Optional[Console] = None,
        leave_service: Optional[LeaveService] = None,
        user_service: Optional[UserService] = None,
        clock: Callable[[], date] = date.today,
    ):
        self.config = config
        self.console = console or Console()
        self.leave_service = leave_service or LeaveService(config)
        self.user_service = user_service or UserService(config)
        self.clock = clock

    def open_employee_portal(self):
        employee = login("employee", self.console, self.user_service)
        if employee is not None:
            EmployeeMenu(
                employee,
                self.console,
                self.leave_service,
                mail_settings=self.config.mail,
                clock=self.clock,
            ).run()

    def open_manager_portal(self):
        manager = login("manager", self.console, self.user_service)
        if manager is not None:
            ManagerMenu(
                manager,
                self.console,
                self.leave_service,
                self.user_service,
                mail_settings=self.config.mail,
            ).run()

    def open_hr_portal(self):
        hr = login("hr", self.console, self.user_service)
        if hr is not None:
            HrMenu(hr, self.console, self.leave_service, self.user_service).run()

    def run(self):
        actions = {
            1: self.open_employee_portal,
            2: self.open_manager_portal,
            3: self.open_hr_portal,
        }
        while True:
            self.console.show("**************Welcome to Leave Management System****************")
            self.console.show("1. Employee Login")
            self.console.show("2. Manager Login")
            self.console.show("3. HR Login")
            self.console.show("4. Exit")

            choice = self.console.ask_choice()
            if choice is None:
                continue
            if choice == 4:
                self.console.show("Exiting.")
                return
            action = actions.get(choice)
            if action is None:
                self.console.show("Invalid choice.")
                continue
            action()

    def close(self):
        self.leave_service.close()
        self.user_service.close()


def main():
    config = load_config()
    logging.basicConfig(level=config.log_level)
    client = LeaveManagementClient(config)
    try:
        client.run()
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, exiting")
    finally:
        client.close()


if __name__ == "__main__":
    main()
