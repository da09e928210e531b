import logging
from typing import Dict, List, Optional, Tuple, Type
import bcrypt
from Schema.user_schema import AccountBase, Employee, Hr, LoginRequest, Manager
from service.api_client import ApiClient, join_url

logger = logging.getLogger(__name__)

# role -> (path under API_URL_MAIN, record model)
ROLE_ENDPOINTS: Dict[str, Tuple[str, Type[AccountBase]]] = {
    "employee": ("employees/getemployees", Employee),
    "manager": ("managers/getmanagers", Manager),
    "hr": ("hrs/gethrs", Hr),
}


def check_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


class UserService(ApiClient):

    def get_accounts(self, role: str) -> List[AccountBase]:
        if role not in ROLE_ENDPOINTS:
            raise ValueError(f"Invalid role '{role}'. Allowed: {', '.join(ROLE_ENDPOINTS)}")
        path, model = ROLE_ENDPOINTS[role]
        return self.get_models(join_url(self.config.api_url_main, path), model, "fetch data from the API")

    def authenticate(self, role: str, login: LoginRequest) -> Optional[AccountBase]:
        """Return the active account whose email and bcrypt hash match, or None"""
        for account in self.get_accounts(role):
            if account.email == login.email and check_password(login.password, account.password) and account.is_active:
                logger.info("Login successful", extra={"role": role})
                return account

        logger.info("Login failed", extra={"role": role})
        return None

    def get_all_employees(self) -> List[Employee]:
        return self.get_models(
            self.config.api_url_get_all_employees_with_details,
            Employee,
            "fetch employee information",
        )

    def get_employees_reporting_to(self, manager_id: int) -> List[Employee]:
        return self.get_models(
            join_url(self.config.api_url_list_employees_reporting_to_manager, manager_id),
            Employee,
            "fetch employee information",
        )
