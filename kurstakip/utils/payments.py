from __future__ import annotations

from datetime import datetime
from typing import Iterable, List

from kurstakip.schemas.payment import PaymentOut, PaymentSummary

OPEN_STATUSES = ("pending", "overdue")


def is_overdue(payment: PaymentOut, now: datetime) -> bool:
    """Only pending payments can become overdue; paid and cancelled never do."""
    return payment.status == "pending" and payment.due_date < now


def effective_payment_status(payment: PaymentOut, now: datetime) -> str:
    return "overdue" if is_overdue(payment, now) else payment.status


def with_effective_status(payments: Iterable[PaymentOut], now: datetime) -> List[PaymentOut]:
    return [
        p.model_copy(update={"status": effective_payment_status(p, now)})
        for p in payments
    ]


def overdue(payments: Iterable[PaymentOut]) -> List[PaymentOut]:
    return [p for p in payments if p.status == "overdue"]


def pending(payments: Iterable[PaymentOut]) -> List[PaymentOut]:
    return [p for p in payments if p.status == "pending"]


def paid(payments: Iterable[PaymentOut]) -> List[PaymentOut]:
    return [p for p in payments if p.status == "paid"]


def total(payments: Iterable[PaymentOut]) -> float:
    return sum(p.amount for p in payments)


def summary(payments: Iterable[PaymentOut]) -> PaymentSummary:
    payments = list(payments)
    pending_rows = pending(payments)
    overdue_rows = overdue(payments)
    return PaymentSummary(
        paid_total=total(paid(payments)),
        pending_total=total(pending_rows),
        overdue_total=total(overdue_rows),
        pending_count=len(pending_rows),
        overdue_count=len(overdue_rows),
    )
