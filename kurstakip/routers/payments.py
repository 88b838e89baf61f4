from typing import List, Optional

from fastapi import APIRouter, Depends

from kurstakip.dependencies import get_workspace
from kurstakip.errors import NotFoundError
from kurstakip.schemas.payment import MarkPaid, PaymentCreate, PaymentOut, PaymentSummary, PaymentUpdate
from kurstakip.stores.workspace import Workspace
from kurstakip.utils.auth import require_admin

# teachers never see payment data
router = APIRouter(prefix="/payments", tags=["Payments"], dependencies=[Depends(require_admin)])


@router.get("/", response_model=List[PaymentOut])
def list_payments(
    student_id: Optional[str] = None,
    enrollment_id: Optional[str] = None,
    status: Optional[str] = None,
    ws: Workspace = Depends(get_workspace),
):
    store = ws.payments
    if student_id:
        payments = store.payments_by_student(student_id)
    elif enrollment_id:
        payments = store.payments_by_enrollment(enrollment_id)
    else:
        payments = store.payments
    if status:
        payments = [p for p in payments if p.status == status]
    return payments


@router.get("/summary", response_model=PaymentSummary)
def payment_summary(ws: Workspace = Depends(get_workspace)):
    return ws.payments.summary()


@router.get("/overdue", response_model=List[PaymentOut])
def overdue_payments(ws: Workspace = Depends(get_workspace)):
    return ws.payments.overdue_payments()


@router.post("/", response_model=PaymentOut, status_code=201)
def create_payment(payload: PaymentCreate, ws: Workspace = Depends(get_workspace)):
    if ws.students.get_student(payload.student_id) is None:
        raise NotFoundError("Student", payload.student_id)
    if ws.enrollments.get(payload.enrollment_id) is None:
        raise NotFoundError("Enrollment", payload.enrollment_id)
    payment_id = ws.payments.add_payment(**payload.model_dump())
    return ws.payments.get(payment_id)


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(payment_id: str, ws: Workspace = Depends(get_workspace)):
    payment = ws.payments.get(payment_id)
    if payment is None:
        raise NotFoundError("Payment", payment_id)
    return payment


@router.patch("/{payment_id}", response_model=PaymentOut)
def update_payment(payment_id: str, payload: PaymentUpdate, ws: Workspace = Depends(get_workspace)):
    ws.payments.update_payment(payment_id, **payload.model_dump(exclude_unset=True))
    return ws.payments.get(payment_id)


@router.post("/{payment_id}/pay", response_model=PaymentOut)
def mark_as_paid(payment_id: str, payload: MarkPaid, ws: Workspace = Depends(get_workspace)):
    ws.payments.mark_as_paid(payment_id, payload.method)
    return ws.payments.get(payment_id)


@router.post("/{payment_id}/cancel", response_model=PaymentOut)
def cancel_payment(payment_id: str, ws: Workspace = Depends(get_workspace)):
    ws.payments.cancel_payment(payment_id)
    return ws.payments.get(payment_id)


@router.delete("/{payment_id}", status_code=204)
def delete_payment(payment_id: str, ws: Workspace = Depends(get_workspace)):
    ws.payments.delete_payment(payment_id)
