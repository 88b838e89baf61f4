from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from kurstakip.config import settings
from kurstakip.dependencies import get_workspace
from kurstakip.errors import NotFoundError
from kurstakip.schemas.enrollment import EnrollmentCreate, EnrollmentDetails, EnrollmentOut, EnrollmentUpdate
from kurstakip.stores.workspace import Workspace

router = APIRouter(prefix="/enrollments", tags=["Enrollments"])


@router.get("/", response_model=List[EnrollmentDetails])
def list_enrollments(student_id: Optional[str] = None, ws: Workspace = Depends(get_workspace)):
    """
    Enrollments joined with their student and course. "expired" is worked
    out on read and never stored.
    """
    if student_id:
        return ws.student_enrollments(student_id)
    return ws.enrollments_with_details()


@router.get("/expiring", response_model=List[EnrollmentDetails])
def expiring_enrollments(
    threshold: int = Query(settings.expiry_threshold_days, ge=1, le=365),
    ws: Workspace = Depends(get_workspace),
):
    return ws.expiring_enrollments(threshold)


@router.post("/", response_model=EnrollmentOut, status_code=201)
def create_enrollment(payload: EnrollmentCreate, ws: Workspace = Depends(get_workspace)):
    enrollment_id = ws.enroll_student(
        payload.student_id, payload.course_id, payload.start_date, payload.notes
    )
    return ws.enrollments.get(enrollment_id)


@router.get("/{enrollment_id}", response_model=EnrollmentOut)
def get_enrollment(enrollment_id: str, ws: Workspace = Depends(get_workspace)):
    enrollment = ws.enrollments.get(enrollment_id)
    if enrollment is None:
        raise NotFoundError("Enrollment", enrollment_id)
    return enrollment


@router.patch("/{enrollment_id}", response_model=EnrollmentOut)
def update_enrollment(enrollment_id: str, payload: EnrollmentUpdate, ws: Workspace = Depends(get_workspace)):
    ws.enrollments.update_enrollment(enrollment_id, **payload.model_dump(exclude_unset=True))
    return ws.enrollments.get(enrollment_id)


@router.post("/{enrollment_id}/complete", response_model=EnrollmentOut)
def complete_enrollment(enrollment_id: str, ws: Workspace = Depends(get_workspace)):
    ws.enrollments.complete_enrollment(enrollment_id)
    return ws.enrollments.get(enrollment_id)


@router.post("/{enrollment_id}/cancel", response_model=EnrollmentOut)
def cancel_enrollment(enrollment_id: str, ws: Workspace = Depends(get_workspace)):
    ws.enrollments.cancel_enrollment(enrollment_id)
    return ws.enrollments.get(enrollment_id)


@router.delete("/{enrollment_id}", status_code=204)
def delete_enrollment(enrollment_id: str, ws: Workspace = Depends(get_workspace)):
    ws.enrollments.delete(enrollment_id)
