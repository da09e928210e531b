from typing import Optional


class LeaveApiError(Exception):
    """Raised when the leave management API answers with a non-200 status or cannot be reached"""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url

    def __str__(self):
        if self.status_code is not None:
            return f"{self.message}. Response code: {self.status_code}"
        return self.message


class MailConfigurationError(Exception):
    """Raised when the SMTP settings are incomplete"""
