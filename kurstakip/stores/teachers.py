from typing import List, Optional

from kurstakip.models.teacher import Teacher
from kurstakip.schemas.teacher import TeacherOut
from kurstakip.stores.base import RecordStore


class TeacherStore(RecordStore[TeacherOut]):
    model = Teacher
    schema = TeacherOut

    @property
    def teachers(self) -> List[TeacherOut]:
        return self.items

    def add_teacher(self, **fields) -> str:
        return self.add(**{**fields, "is_active": True})

    def update_teacher(self, teacher_id: str, **fields) -> None:
        self.update(teacher_id, **fields)

    def delete_teacher(self, teacher_id: str) -> None:
        self.delete(teacher_id)

    def get_teacher(self, teacher_id: str) -> Optional[TeacherOut]:
        return self.get(teacher_id)

    def active_teachers(self) -> List[TeacherOut]:
        return [t for t in self.items if t.is_active]
