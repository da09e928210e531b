import calendar
import logging
from datetime import date
from typing import List, Tuple
from Schema.leave_management_schema import (
    LeaveApplicationCreate,
    LeaveQuota,
    LeaveRecord,
    LeaveStatusUpdate,
)
from service.api_client import ApiClient, join_url
from utils.exceptions import LeaveApiError

logger = logging.getLogger(__name__)


def month_window(today: date) -> Tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def year_window(today: date) -> Tuple[date, date]:
    return date(today.year, 1, 1), date(today.year, 12, 31)


def period_params(start_date: date, end_date: date, **extra) -> dict:
    params = dict(extra)
    params["startDate"] = start_date.isoformat()
    params["endDate"] = end_date.isoformat()
    return params


class LeaveService(ApiClient):
    """Leave history, submission and approval endpoints"""

    def count_leaves(self, employee_id: int, start_date: date, end_date: date) -> int:
        """Number of leave records in the window. Any API failure counts as zero."""
        try:
            leaves = self.get_list(
                self.config.api_url_view_leaves,
                "fetch leaves information",
                params=period_params(start_date, end_date, employeeId=employee_id),
            )
        except LeaveApiError as exc:
            logger.warning(
                f"Treating leave count as 0: {exc}",
                extra={"employee_id": employee_id},
            )
            return 0
        return len(leaves)

    def get_quota(self, employee_id: int, today: date) -> LeaveQuota:
        return LeaveQuota(
            monthly_used=self.count_leaves(employee_id, *month_window(today)),
            yearly_used=self.count_leaves(employee_id, *year_window(today)),
        )

    def submit_leave(self, draft: LeaveApplicationCreate) -> None:
        payload = draft.to_payload()
        logger.info("Submitting leave application", extra={"employee_id": draft.employee_id})
        self.post(self.config.api_url_leave, "submit leave application", json=payload)
        logger.info("Leave application submitted", extra={"employee_id": draft.employee_id})

    def get_employee_leaves(self, employee_id: int) -> List[LeaveRecord]:
        return self.get_models(
            join_url(self.config.api_url_view_leaves_employees, employee_id),
            LeaveRecord,
            "fetch leave applications",
        )

    def get_employee_leaves_in_period(self, employee_id: int, start_date: date, end_date: date) -> List[LeaveRecord]:
        return self.get_models(
            self.config.api_url_view_leaves_in_time_period,
            LeaveRecord,
            "fetch leave applications",
            params=period_params(start_date, end_date, employeeId=employee_id),
        )

    def get_pending_leaves_for_manager(self, manager_id: int) -> List[LeaveRecord]:
        return self.get_models(
            join_url(self.config.api_url_approve_or_reject_leave, manager_id),
            LeaveRecord,
            "fetch leave applications",
        )

    def submit_leave_decision(self, update: LeaveStatusUpdate) -> None:
        logger.info(
            "Updating leave status",
            extra={"leave_id": update.leave_id, "new_status": update.status},
        )
        self.post(
            join_url(self.config.api_url_submit_leave_approval, update.leave_id),
            "update leave status",
            content=update.action.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    def get_leave_requests_for_manager(self, manager_id: int) -> List[LeaveRecord]:
        return self.get_models(
            join_url(self.config.api_url_leave_requests_for_manager, manager_id),
            LeaveRecord,
            "fetch leave requests",
        )

    def get_manager_leaves_in_period(self, manager_id: int, start_date: date, end_date: date) -> List[LeaveRecord]:
        return self.get_models(
            self.config.api_url_view_leaves_by_manager,
            LeaveRecord,
            "fetch leave requests",
            params=period_params(start_date, end_date, managerId=manager_id),
        )

    def get_all_leaves_in_period(self, start_date: date, end_date: date) -> List[LeaveRecord]:
        return self.get_models(
            self.config.api_url_get_leave_all_employees,
            LeaveRecord,
            "fetch leave applications",
            params=period_params(start_date, end_date),
        )
