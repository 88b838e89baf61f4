from datetime import datetime
from typing import Dict, Optional

from kurstakip.stores.workspace import Workspace

CATEGORY = "Türk İşaret Dili"

DEFAULT_COURSES = [
    {"name": "A1.1", "description": "Başlangıç seviyesi - 1. modül", "duration_days": 30, "price": 2000},
    {"name": "A1.2", "description": "Başlangıç seviyesi - 2. modül", "duration_days": 30, "price": 2000},
    {"name": "A1.3", "description": "Başlangıç seviyesi - 3. modül", "duration_days": 30, "price": 2000},
    {"name": "A2.1", "description": "Temel seviye - 1. modül", "duration_days": 30, "price": 2000},
    {"name": "A2.2", "description": "Temel seviye - 2. modül", "duration_days": 30, "price": 2000},
    {"name": "A2.3", "description": "Temel seviye - 3. modül", "duration_days": 30, "price": 2000},
    {"name": "A2.4", "description": "Temel seviye - 4. modül", "duration_days": 30, "price": 2000},
    {"name": "A2.5", "description": "Temel seviye - 5. modül", "duration_days": 30, "price": 2000},
    {"name": "B1", "description": "Orta seviye", "duration_days": 60, "price": 4000},
    {"name": "B2", "description": "Orta üstü seviye", "duration_days": 60, "price": 4000},
    {"name": "C1", "description": "İleri seviye", "duration_days": 90, "price": 5500},
    {"name": "C2", "description": "Uzman seviye", "duration_days": 90, "price": 5500},
]

DEMO_STUDENTS = [
    {"first_name": "Ahmet", "last_name": "Yılmaz", "email": "ahmet@example.com", "phone": "5551234567"},
    {"first_name": "Ayşe", "last_name": "Demir", "email": "ayse@example.com", "phone": "5552345678"},
    {"first_name": "Mehmet", "last_name": "Kaya", "email": "mehmet@example.com", "phone": "5553456789"},
    {"first_name": "Fatma", "last_name": "Çelik", "email": "fatma@example.com", "phone": "5554567890"},
    {"first_name": "Ali", "last_name": "Şahin", "email": "ali@example.com", "phone": "5555678901"},
    {"first_name": "Zeynep", "last_name": "Arslan", "email": "zeynep@example.com", "phone": "5556789012"},
]


def seed_demo_data(workspace: Workspace, today: Optional[datetime] = None) -> Dict[str, int]:
    """
    Fills an empty institution with the default catalogue and a few demo students.
    Does nothing once the institution has any course.
    """
    if workspace.courses.courses:
        return {"courses": 0, "students": 0, "enrollments": 0}

    today = today or datetime.now()
    course_ids = [
        workspace.courses.add_course(category=CATEGORY, **course) for course in DEFAULT_COURSES
    ]
    student_ids = [
        workspace.students.add_student(notes="Demo öğrenci", **student) for student in DEMO_STUDENTS
    ]

    for i, student_id in enumerate(student_ids):
        course_id = course_ids[i % min(3, len(course_ids))]
        workspace.enroll_student(student_id, course_id, today)

    return {"courses": len(course_ids), "students": len(student_ids), "enrollments": len(student_ids)}
