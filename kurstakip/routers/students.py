from typing import List

from fastapi import APIRouter, Depends

from kurstakip.dependencies import get_workspace
from kurstakip.errors import NotFoundError
from kurstakip.schemas.enrollment import EnrollmentDetails
from kurstakip.schemas.student import StudentCreate, StudentOut, StudentUpdate
from kurstakip.stores.workspace import Workspace

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/", response_model=List[StudentOut])
def list_students(ws: Workspace = Depends(get_workspace)):
    return ws.students.students


@router.post("/", response_model=StudentOut, status_code=201)
def create_student(payload: StudentCreate, ws: Workspace = Depends(get_workspace)):
    student_id = ws.students.add_student(**payload.model_dump())
    return ws.students.get_student(student_id)


@router.get("/{student_id}", response_model=StudentOut)
def get_student(student_id: str, ws: Workspace = Depends(get_workspace)):
    student = ws.students.get_student(student_id)
    if student is None:
        raise NotFoundError("Student", student_id)
    return student


@router.patch("/{student_id}", response_model=StudentOut)
def update_student(student_id: str, payload: StudentUpdate, ws: Workspace = Depends(get_workspace)):
    ws.students.update_student(student_id, **payload.model_dump(exclude_unset=True))
    return ws.students.get_student(student_id)


@router.delete("/{student_id}")
def delete_student(student_id: str, ws: Workspace = Depends(get_workspace)):
    """Deletes the student together with all of their enrollments."""
    removed = ws.delete_student(student_id)
    return {"success": True, "deleted_enrollments": removed}


@router.get("/{student_id}/enrollments", response_model=List[EnrollmentDetails])
def student_enrollments(student_id: str, ws: Workspace = Depends(get_workspace)):
    return ws.student_enrollments(student_id)
