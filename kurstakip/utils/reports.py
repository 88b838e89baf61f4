"""Dashboard figures computed from an institution's stores."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from kurstakip.stores.workspace import Workspace
from kurstakip.utils.payments import summary


def _month_start(value: datetime, back: int) -> datetime:
    index = value.year * 12 + value.month - 1 - back
    return datetime(index // 12, index % 12 + 1, 1)


def monthly_revenue(payments, months: int = 6, today: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Paid and not-yet-paid amounts per due month, oldest month first."""
    today = today or datetime.now()
    rows = []
    for back in range(months - 1, -1, -1):
        start = _month_start(today, back)
        end = _month_start(today, back - 1)
        in_month = [p for p in payments if start <= p.due_date < end and p.status != "cancelled"]
        rows.append({
            "month": start.strftime("%Y-%m"),
            "paid": sum(p.amount for p in in_month if p.status == "paid"),
            "outstanding": sum(p.amount for p in in_month if p.status != "paid"),
        })
    return rows


def dashboard(workspace: Workspace, include_financial: bool, today: Optional[datetime] = None) -> Dict[str, Any]:
    today = today or datetime.now()
    details = workspace.enrollments_with_details(today)
    active = [e for e in details if e.status == "active"]
    courses = workspace.courses.courses

    data: Dict[str, Any] = {
        "students": len(workspace.students.students),
        "courses": len(courses),
        "active_enrollments": len(active),
        "expiring_enrollments": len(workspace.expiring_enrollments(today=today)),
        "active_teachers": len(workspace.teachers.active_teachers()),
        "course_distribution": [
            {"course_id": c.id, "name": c.name, "active": sum(1 for e in active if e.course_id == c.id)}
            for c in courses
        ],
        "attendance_rates": [
            {"course_id": c.id, "name": c.name, "rate": workspace.attendance.course_attendance_rate(c.id)}
            for c in courses
        ],
    }

    if include_financial:
        payments = workspace.payments.payments
        totals = summary(payments)
        data["financial"] = {
            "total_revenue": totals.paid_total,
            "pending_amount": totals.pending_total + totals.overdue_total,
            "pending_count": totals.pending_count,
            "overdue_count": totals.overdue_count,
            "monthly": monthly_revenue(payments, today=today),
        }
    return data
