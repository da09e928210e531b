import pytest

from router.hr_router import HrMenu
from Schema.user_schema import Hr


@pytest.fixture
def build_menu(leave_service, user_service, make_console):
    hr = Hr(hr_id=5, email="people@company.com", account_status="Active")

    def _build(answers):
        console = make_console(answers)
        return HrMenu(hr, console, leave_service, user_service), console
    return _build


def test_list_all_employees_includes_manager_column(api, build_menu):
    api.add("GET", "/employees/getemployees", [{
        "employeeId": 7, "managerId": 3, "firstName": "Asha", "lastName": "Rao",
        "email": "asha@company.com", "accountStatus": "Active", "dob": "1990-04-01",
        "contactNumber": "9000000000",
    }])
    menu, console = build_menu([])

    menu.list_all_employees()

    assert console.lines[0] == "List of All Employees with Details:"
    assert console.lines[1].endswith("| Manager Id |")
    assert console.lines[3].endswith("| 3          |")


def test_list_all_employees_empty(api, build_menu):
    api.add("GET", "/employees/getemployees", [])
    menu, console = build_menu([])

    menu.list_all_employees()

    assert console.lines == ["No employees found."]


def test_leaves_in_time_period_reprompts_end_date(api, build_menu):
    api.add("GET", "/leaves/period", [{
        "leaveId": 1, "employeeId": 7, "startDate": "2024-03-04", "endDate": "2024-03-05",
        "leaveType": "CasualLeave", "reason": "Trip", "status": "approved",
    }])
    menu, console = build_menu(["2024-03-01", "2024-02-01", "2024-03-31"])

    menu.list_leaves_in_time_period()

    assert "End date should be after the start date. Please enter a valid end date." in console.lines
    assert "Leave Applications in the specified time period:" in console.lines
    params = api.requests[0].url.params
    assert (params["startDate"], params["endDate"]) == ("2024-03-01", "2024-03-31")


def test_leaves_in_time_period_api_failure(api, build_menu):
    api.add("GET", "/leaves/period", {}, status=500)
    menu, console = build_menu(["2024-03-01", "2024-03-31"])

    menu.list_leaves_in_time_period()

    assert console.lines[-1] == "Failed to fetch leave applications. Response code: 500"


def test_run_menu(api, build_menu):
    api.add("GET", "/employees/getemployees", [])
    menu, console = build_menu(["", "1", "4", "3"])

    menu.run()

    assert console.lines[:2] == ["Welcome to HRs portal", "Your ID is: 5"]
    assert "No employees found." in console.lines
    assert "Invalid choice. Please enter a valid option." in console.lines
    assert console.lines[-1] == "Logging out..."
