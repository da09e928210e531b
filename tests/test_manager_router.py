import pytest

from router.manager_router import ManagerMenu
from Schema.user_schema import Manager

PENDING = [
    {
        "leaveId": 11,
        "employeeId": 7,
        "startDate": "2024-06-12",
        "endDate": "2024-06-13",
        "leaveType": "SickLeave",
        "reason": "Flu",
        "status": "pending",
    },
    {
        "leaveId": 12,
        "employeeId": 8,
        "startDate": "2024-06-20",
        "endDate": "2024-06-20",
        "leaveType": "Comp-off",
        "reason": "Release weekend",
        "status": "pending",
    },
]


@pytest.fixture
def build_menu(leave_service, user_service, mail_settings, make_console):
    manager = Manager(manager_id=3, email="boss@company.com", account_status="Active")

    def _build(answers):
        console = make_console(answers)
        return ManagerMenu(manager, console, leave_service, user_service, mail_settings=mail_settings), console
    return _build


def test_approve_leave(api, build_menu, sent_mail):
    api.add("GET", "/leaves/pending/3", PENDING)
    api.add("POST", "/leaves/approval/12", {})
    menu, console = build_menu(["99", "abc", "12", "x", "12", "a", "Enjoy"])

    assert menu.approve_or_reject_leave() is True

    assert "Invalid Leave ID. Please enter a valid Leave ID or 0 to cancel." in console.lines
    assert "Invalid input. Please enter a valid Leave ID or 0 to cancel." in console.lines
    assert "Invalid action. Please enter 'A' to approve or 'R' to reject." in console.lines
    assert console.lines[-1] == "Leave status updated successfully."
    assert api.requests_to("POST", "/leaves/approval/12")[0].content == b"A"
    assert sent_mail[0].get_content() == "Leave has been approved by your manager.\n\nEnjoy\n"


def test_reject_leave_with_empty_message(api, build_menu, sent_mail):
    api.add("GET", "/leaves/pending/3", PENDING)
    api.add("POST", "/leaves/approval/11", {})
    menu, console = build_menu(["11", "R", ""])

    assert menu.approve_or_reject_leave() is True
    assert "Leave has been rejected by your manager." in sent_mail[0].get_content()


@pytest.mark.parametrize("answer", ["0", "E"])
def test_cancel_selection(api, build_menu, answer):
    api.add("GET", "/leaves/pending/3", PENDING)
    menu, console = build_menu([answer])

    assert menu.approve_or_reject_leave() is False
    assert console.lines[-1] == "Operation canceled."
    assert [r for r in api.requests if r.method == "POST"] == []


@pytest.mark.parametrize("answer", ["E", "e"])
def test_cancel_at_action_prompt(api, build_menu, sent_mail, answer):
    api.add("GET", "/leaves/pending/3", PENDING)
    menu, console = build_menu(["11", answer])

    assert menu.approve_or_reject_leave() is False
    assert console.lines[-1] == "Operation canceled."
    assert "Invalid action. Please enter 'A' to approve or 'R' to reject." not in console.lines
    assert [r for r in api.requests if r.method == "POST"] == []
    assert sent_mail == []


def test_no_pending_leaves(api, build_menu):
    api.add("GET", "/leaves/pending/3", [])
    menu, console = build_menu([])

    assert menu.approve_or_reject_leave() is False
    assert console.lines == ["No leave applications for approval/rejection."]


def test_decision_failure_skips_email(api, build_menu, sent_mail):
    api.add("GET", "/leaves/pending/3", PENDING)
    api.add("POST", "/leaves/approval/11", {}, status=500)
    menu, console = build_menu(["11", "A"])

    assert menu.approve_or_reject_leave() is False
    assert console.lines[-1] == "Failed to update leave status. Response code: 500"
    assert sent_mail == []


def test_pending_table_lists_all_columns(api, build_menu):
    api.add("GET", "/leaves/pending/3", PENDING)
    menu, console = build_menu(["0"])

    menu.approve_or_reject_leave()

    assert console.lines[1] == (
        "| Leave ID | Employee ID | Start Date | End Date   | Leave Type | Status  | Reason          |"
    )


def test_list_employees(api, build_menu):
    api.add("GET", "/managers/employees/3", [{
        "employeeId": 7, "managerId": 3, "firstName": "Asha", "lastName": "Rao",
        "email": "asha@company.com", "accountStatus": "Active",
    }])
    menu, console = build_menu([])

    menu.list_employees()

    assert console.lines[0] == "Employees Reporting to You:"
    assert "asha@company.com" in console.lines[3]


def test_list_leave_requests_and_period(api, build_menu):
    api.add("GET", "/leaves/manager/3", [])
    api.add("GET", "/leaves/manager/period", PENDING)
    menu, console = build_menu(["2024-06-01", "2024-06-30"])

    menu.list_leave_requests()
    menu.view_leaves_in_time_period()

    assert "No leave requests from your employees." in console.lines
    assert "Leave Requests within the Time Period:" in console.lines
    assert api.requests[-1].url.params["managerId"] == "3"


def test_run_menu(api, build_menu):
    api.add("GET", "/leaves/manager/3", [])
    menu, console = build_menu(["3", "7", "5"])

    menu.run()

    assert console.lines[0] == "Welcome to Managers portal"
    assert "Your ID is: 3" in console.lines
    assert "Invalid choice. Please enter a valid option." in console.lines
    assert console.lines[-1] == "Logging out..."
