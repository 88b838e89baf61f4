from typing import Dict, List

from fastapi import APIRouter, Depends

from kurstakip.dependencies import get_workspace
from kurstakip.errors import NotFoundError
from kurstakip.schemas.course import CourseCreate, CourseOut, CourseUpdate
from kurstakip.stores.workspace import Workspace

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get("/", response_model=List[CourseOut])
def list_courses(ws: Workspace = Depends(get_workspace)):
    return ws.courses.courses


@router.get("/by-category", response_model=Dict[str, List[CourseOut]])
def courses_by_category(ws: Workspace = Depends(get_workspace)):
    return ws.courses.courses_by_category()


@router.post("/", response_model=CourseOut, status_code=201)
def create_course(payload: CourseCreate, ws: Workspace = Depends(get_workspace)):
    course_id = ws.courses.add_course(**payload.model_dump())
    return ws.courses.get_course(course_id)


@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: str, ws: Workspace = Depends(get_workspace)):
    course = ws.courses.get_course(course_id)
    if course is None:
        raise NotFoundError("Course", course_id)
    return course


@router.patch("/{course_id}", response_model=CourseOut)
def update_course(course_id: str, payload: CourseUpdate, ws: Workspace = Depends(get_workspace)):
    # existing enrollments keep the end date they were created with
    ws.courses.update_course(course_id, **payload.model_dump(exclude_unset=True))
    return ws.courses.get_course(course_id)


@router.delete("/{course_id}", status_code=204)
def delete_course(course_id: str, ws: Workspace = Depends(get_workspace)):
    ws.courses.delete_course(course_id)
