from kurstakip.models.institution import Institution
from kurstakip.models.user import User, Invite
from kurstakip.models.student import Student
from kurstakip.models.course import Course
from kurstakip.models.enrollment import Enrollment
from kurstakip.models.attendance import Attendance
from kurstakip.models.payment import Payment
from kurstakip.models.teacher import Teacher
from kurstakip.models.notification import Notification

__all__ = [
    "Institution",
    "User",
    "Invite",
    "Student",
    "Course",
    "Enrollment",
    "Attendance",
    "Payment",
    "Teacher",
    "Notification",
]
