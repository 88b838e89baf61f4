from typing import List, Optional

from kurstakip.models.student import Student
from kurstakip.schemas.student import StudentOut
from kurstakip.stores.base import RecordStore


class StudentStore(RecordStore[StudentOut]):
    """Deleting a student here does not touch enrollments; see Workspace.delete_student."""

    model = Student
    schema = StudentOut

    @property
    def students(self) -> List[StudentOut]:
        return self.items

    def prepare(self, rows):
        return sorted(rows, key=lambda s: s.created_at, reverse=True)

    def add_student(self, **fields) -> str:
        return self.add(**fields)

    def update_student(self, student_id: str, **fields) -> None:
        self.update(student_id, **fields)

    def delete_student(self, student_id: str) -> None:
        self.delete(student_id)

    def get_student(self, student_id: str) -> Optional[StudentOut]:
        return self.get(student_id)
