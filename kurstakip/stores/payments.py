import logging
from datetime import datetime
from typing import List, Optional

from kurstakip.errors import InvalidTransition, NotFoundError
from kurstakip.models.payment import Payment
from kurstakip.schemas.payment import PaymentOut, PaymentSummary
from kurstakip.stores.base import RecordStore
from kurstakip.utils import payments as derive

logger = logging.getLogger(__name__)


class PaymentStore(RecordStore[PaymentOut]):
    """
    Every snapshot is shown with pending-but-past-due rows as overdue.
    `reconcile_overdue` writes that change back; it runs once after the first load.
    """

    model = Payment
    schema = PaymentOut

    def __init__(self, gateway, context=None, clock=datetime.now):
        super().__init__(gateway, context)
        self.clock = clock
        self._reconciled_for: Optional[str] = None

    @property
    def payments(self) -> List[PaymentOut]:
        return self.items

    def initialize(self, institution_id: str) -> None:
        super().initialize(institution_id)
        if self._reconciled_for != institution_id:
            self._reconciled_for = institution_id
            self.reconcile_overdue()

    def prepare(self, rows):
        return derive.with_effective_status(rows, self.clock())

    def reconcile_overdue(self, now: Optional[datetime] = None) -> int:
        institution_id = self._require_institution()
        now = now or self.clock()
        stored = self.gateway.find(Payment, PaymentOut, institution_id=institution_id, status="pending")
        marked = 0
        for payment in stored:
            if not derive.is_overdue(payment, now):
                continue
            try:
                # only rows still pending; a concurrent mark_as_paid or cancel wins
                self.gateway.update(
                    Payment, payment.id, {"status": "overdue"},
                    institution_id=institution_id, status="pending",
                )
            except NotFoundError:
                logger.info("Payment %s changed before it could be marked overdue", payment.id)
                continue
            marked += 1
        if marked:
            logger.info("Marked %d payment(s) overdue for institution %s", marked, institution_id)
        return marked

    def add_payment(self, **fields) -> str:
        return self.add(**fields)

    def update_payment(self, payment_id: str, **fields) -> None:
        fields.pop("status", None)
        self.update(payment_id, **fields)

    def delete_payment(self, payment_id: str) -> None:
        self.delete(payment_id)

    def mark_as_paid(self, payment_id: str, method: str) -> None:
        self._require_open(payment_id, "paid")
        self.update(payment_id, status="paid", paid_date=self.clock(), method=method)

    def cancel_payment(self, payment_id: str) -> None:
        self._require_open(payment_id, "cancelled")
        self.update(payment_id, status="cancelled")

    def _require_open(self, payment_id: str, target: str) -> PaymentOut:
        current = self.get(payment_id)
        if current is None:
            raise NotFoundError("Payment", payment_id)
        if current.status not in derive.OPEN_STATUSES:
            raise InvalidTransition("Payment", current.status, target)
        return current

    # --- queries -----------------------------------------------------------

    def payments_by_student(self, student_id: str) -> List[PaymentOut]:
        return [p for p in self.items if p.student_id == student_id]

    def payments_by_enrollment(self, enrollment_id: str) -> List[PaymentOut]:
        return [p for p in self.items if p.enrollment_id == enrollment_id]

    def overdue_payments(self) -> List[PaymentOut]:
        return derive.overdue(self.items)

    def pending_payments(self) -> List[PaymentOut]:
        return derive.pending(self.items)

    def paid_total(self) -> float:
        return derive.total(derive.paid(self.items))

    def pending_total(self) -> float:
        return derive.total(self.pending_payments())

    def overdue_total(self) -> float:
        return derive.total(self.overdue_payments())

    def summary(self) -> PaymentSummary:
        return derive.summary(self.items)
