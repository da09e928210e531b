from typing import Iterable, List, Sequence

LEAVE_HEADERS = ["Leave ID", "Employee ID", "Start Date", "End Date", "Leave Type", "Status", "Reason"]
MY_LEAVE_HEADERS = ["Leave ID", "Start Date", "End Date", "Leave Type", "Status", "Reason"]
EMPLOYEE_HEADERS = ["Employee ID", "First Name", "Last Name", "Email", "Date of Birth", "Contact Number", "Account Status"]
EMPLOYEE_DETAIL_HEADERS = EMPLOYEE_HEADERS + ["Manager Id"]


def _cell(value) -> str:
    return "" if value is None else str(value)


def format_row(cells: Sequence[str], widths: Sequence[int]) -> str:
    return "|" + "".join(f" {cell.ljust(width)} |" for cell, width in zip(cells, widths))


def format_separator(widths: Sequence[int]) -> str:
    return "+" + "".join("-" * (width + 2) + "+" for width in widths)


def format_table(headers: Sequence[str], rows: Iterable[Sequence]) -> List[str]:
    """Render rows as aligned text lines: header, separator, then one line per row"""
    text_rows = [[_cell(value) for value in row] for row in rows]
    widths = [len(header) for header in headers]
    for row in text_rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = [format_row(headers, widths), format_separator(widths)]
    lines.extend(format_row(row, widths) for row in text_rows)
    return lines


def leave_rows(leaves, include_employee: bool = True) -> List[list]:
    rows = []
    for leave in leaves:
        row = [leave.leave_id]
        if include_employee:
            row.append(leave.employee_id)
        row.extend([
            leave.start_date.isoformat(),
            leave.end_date.isoformat(),
            leave.leave_type,
            leave.status,
            leave.reason,
        ])
        rows.append(row)
    return rows


def employee_rows(employees, include_manager: bool = False) -> List[list]:
    rows = []
    for employee in employees:
        row = [
            employee.employee_id,
            employee.first_name,
            employee.last_name,
            employee.email,
            employee.dob,
            employee.contact_number,
            employee.account_status,
        ]
        if include_manager:
            row.append(employee.manager_id)
        rows.append(row)
    return rows
