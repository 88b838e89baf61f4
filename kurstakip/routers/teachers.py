from typing import List

from fastapi import APIRouter, Depends

from kurstakip.dependencies import get_workspace
from kurstakip.errors import NotFoundError
from kurstakip.schemas.teacher import TeacherCreate, TeacherOut, TeacherUpdate
from kurstakip.stores.workspace import Workspace
from kurstakip.utils.auth import require_admin

router = APIRouter(prefix="/teachers", tags=["Teachers"])


@router.get("/", response_model=List[TeacherOut])
def list_teachers(active: bool = False, ws: Workspace = Depends(get_workspace)):
    if active:
        return ws.teachers.active_teachers()
    return ws.teachers.teachers


@router.post("/", response_model=TeacherOut, status_code=201, dependencies=[Depends(require_admin)])
def create_teacher(payload: TeacherCreate, ws: Workspace = Depends(get_workspace)):
    teacher_id = ws.teachers.add_teacher(**payload.model_dump())
    return ws.teachers.get_teacher(teacher_id)


@router.get("/{teacher_id}", response_model=TeacherOut)
def get_teacher(teacher_id: str, ws: Workspace = Depends(get_workspace)):
    teacher = ws.teachers.get_teacher(teacher_id)
    if teacher is None:
        raise NotFoundError("Teacher", teacher_id)
    return teacher


@router.patch("/{teacher_id}", response_model=TeacherOut, dependencies=[Depends(require_admin)])
def update_teacher(teacher_id: str, payload: TeacherUpdate, ws: Workspace = Depends(get_workspace)):
    ws.teachers.update_teacher(teacher_id, **payload.model_dump(exclude_unset=True))
    return ws.teachers.get_teacher(teacher_id)


@router.delete("/{teacher_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_teacher(teacher_id: str, ws: Workspace = Depends(get_workspace)):
    ws.teachers.delete_teacher(teacher_id)
