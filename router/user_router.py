import logging
from typing import Optional
from Schema.user_schema import AccountBase, Employee, LoginRequest, is_valid_email
from service.user_service import UserService
from utils.exceptions import LeaveApiError
from utils.prompt_utils import Console

logger = logging.getLogger(__name__)

PORTAL_NAMES = {
    "employee": "Employees",
    "manager": "Managers",
    "hr": "HR's",
}


def login(role: str, console: Console, user_service: UserService) -> Optional[AccountBase]:
    """Prompt for credentials and check them against the account list for the role"""
    console.show(f"Welcome to {PORTAL_NAMES.get(role, role)} portal")

    while True:
        answer = console.ask("Enter your email (or 'E' to exit): ")
        if answer.cancelled:
            console.show("Login canceled.")
            return None
        email = answer.value
        if is_valid_email(email):
            break
        console.show("Invalid email format. Please enter a valid email address.")

    password = console.read_password("Enter your password: ")

    try:
        account = user_service.authenticate(role, LoginRequest(email=email, password=password))
    except LeaveApiError as exc:
        console.show(str(exc))
        return None

    if account is None:
        console.show("Login failed. Invalid email, password, or account is inactive.")
        return None

    console.show("Login successful!")
    if isinstance(account, Employee):
        console.show(f"Employee ID: {account.employee_id}")
        console.show(f"First Name: {account.first_name}")
        console.show(f"Last Name: {account.last_name}")
    return account
