from collections import defaultdict
from typing import Dict, List, Optional

from kurstakip.models.course import Course
from kurstakip.schemas.course import CourseOut
from kurstakip.stores.base import RecordStore


class CourseStore(RecordStore[CourseOut]):
    model = Course
    schema = CourseOut

    @property
    def courses(self) -> List[CourseOut]:
        return self.items

    def add_course(self, **fields) -> str:
        return self.add(**fields)

    def update_course(self, course_id: str, **fields) -> None:
        self.update(course_id, **fields)

    def delete_course(self, course_id: str) -> None:
        self.delete(course_id)

    def get_course(self, course_id: str) -> Optional[CourseOut]:
        return self.get(course_id)

    def courses_by_category(self) -> Dict[str, List[CourseOut]]:
        grouped: Dict[str, List[CourseOut]] = defaultdict(list)
        for course in self.items:
            grouped[course.category or ""].append(course)
        return dict(grouped)
