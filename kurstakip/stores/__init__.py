from kurstakip.stores.attendance import AttendanceStore
from kurstakip.stores.base import RecordStore, StoreContext
from kurstakip.stores.courses import CourseStore
from kurstakip.stores.enrollments import EnrollmentStore
from kurstakip.stores.feed import ChangeFeed
from kurstakip.stores.gateway import DocumentGateway
from kurstakip.stores.notifications import (
    NotificationStore,
    create_expiry_notification,
    create_payment_notification,
)
from kurstakip.stores.payments import PaymentStore
from kurstakip.stores.students import StudentStore
from kurstakip.stores.teachers import TeacherStore
from kurstakip.stores.workspace import Workspace

__all__ = [
    "AttendanceStore",
    "ChangeFeed",
    "CourseStore",
    "DocumentGateway",
    "EnrollmentStore",
    "NotificationStore",
    "PaymentStore",
    "RecordStore",
    "StoreContext",
    "StudentStore",
    "TeacherStore",
    "Workspace",
    "create_expiry_notification",
    "create_payment_notification",
]
