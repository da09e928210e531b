import os
import logging
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class MailSettings(BaseModel):
    username: str
    password: str
    mail_from: str
    mail_to: str
    server: str
    port: int = 587
    starttls: bool = True
    ssl_tls: bool = False


class AppConfig(BaseModel):
    """Endpoints and credentials used by the console client.

    Built once at startup and handed to every service that needs it.
    """
    api_url_main: str
    api_url_leave: str
    api_url_view_leaves: str
    api_url_view_leaves_employees: str
    api_url_view_leaves_in_time_period: str
    api_url_approve_or_reject_leave: str
    api_url_submit_leave_approval: str
    api_url_get_all_employees_with_details: str
    api_url_get_leave_all_employees: str
    api_url_list_employees_reporting_to_manager: str
    api_url_view_leaves_by_manager: str
    api_url_leave_requests_for_manager: str

    http_timeout: float = 10.0
    log_level: str = "INFO"
    mail: Optional[MailSettings] = None

    @property
    def mail_enabled(self) -> bool:
        return self.mail is not None


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _load_mail_settings() -> Optional[MailSettings]:
    mail_username = os.getenv("MAIL_USERNAME")
    mail_password = os.getenv("MAIL_PASSWORD")
    mail_from = os.getenv("MAIL_FROM") or mail_username
    mail_to = os.getenv("MAIL_TO")
    mail_server = os.getenv("MAIL_SERVER")

    if not all([mail_username, mail_password, mail_from, mail_to, mail_server]):
        logger.warning("Email configuration is incomplete. Notifications are disabled.")
        return None

    return MailSettings(
        username=mail_username,
        password=mail_password,
        mail_from=mail_from,
        mail_to=mail_to,
        server=mail_server,
        port=int(os.getenv("MAIL_PORT", "587")),
        starttls=_env_bool("MAIL_STARTTLS", "true"),
        ssl_tls=_env_bool("MAIL_SSL_TLS", "false"),
    )


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """Read the client configuration from the environment (and a .env file if present)"""
    load_dotenv(env_file)

    api_url_main = os.getenv("API_URL_MAIN")
    if not api_url_main:
        raise ValueError("API configuration is incomplete. Please set API_URL_MAIN in your .env file.")
    api_url_main = api_url_main.rstrip("/")

    def endpoint(name: str, default_path: str) -> str:
        return os.getenv(name) or f"{api_url_main}{default_path}"

    return AppConfig(
        api_url_main=api_url_main,
        api_url_leave=endpoint("API_URL_LEAVE", "/leaves"),
        api_url_view_leaves=endpoint("API_URL_VIEW_LEAVES", "/leaves/search"),
        api_url_view_leaves_employees=endpoint("API_URL_VIEW_LEAVES_EMPLOYEES", "/leaves/employee"),
        api_url_view_leaves_in_time_period=endpoint("API_URL_VIEW_LEAVES_IN_TIME_PERIOD", "/leaves/employee/period"),
        api_url_approve_or_reject_leave=endpoint("API_URL_APPROVE_OR_REJECT_LEAVE", "/leaves/pending"),
        api_url_submit_leave_approval=endpoint("API_URL_SUBMIT_LEAVE_APPROVAL", "/leaves/approval"),
        api_url_get_all_employees_with_details=endpoint("API_URL_GET_ALL_EMPLOYEES_WITH_DETAILS", "/employees/getemployees"),
        api_url_get_leave_all_employees=endpoint("API_URL_GET_LEAVE_ALL_EMPLOYEES", "/leaves/period"),
        api_url_list_employees_reporting_to_manager=endpoint("API_URL_LIST_EMPLOYEES_REPORTING_TO_MANAGER", "/managers/employees"),
        api_url_view_leaves_by_manager=endpoint("API_URL_VIEW_LEAVES_BY_MANAGER", "/leaves/manager/period"),
        api_url_leave_requests_for_manager=endpoint("API_URL_LEAVE_REQUESTS_FOR_MANAGER", "/leaves/manager"),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "10")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        mail=_load_mail_settings(),
    )
