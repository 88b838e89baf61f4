from typing import Any, Dict, List, Optional

from kurstakip.errors import NotFoundError
from kurstakip.models.notification import Notification
from kurstakip.schemas.notification import NotificationOut
from kurstakip.stores.base import RecordStore


class NotificationStore(RecordStore[NotificationOut]):
    """In-app notifications for one user inside one institution."""

    model = Notification
    schema = NotificationOut

    def __init__(self, gateway, context=None):
        super().__init__(gateway, context)
        self.user_id: Optional[str] = None

    @property
    def notifications(self) -> List[NotificationOut]:
        return self.items

    @property
    def unread_count(self) -> int:
        return len(self.unread())

    def initialize(self, institution_id: str, user_id: Optional[str] = None) -> None:
        if self.initialized and self.context.institution_id == institution_id and self.user_id == user_id:
            return
        if self.initialized:
            self.reset()
        self.user_id = user_id
        super().initialize(institution_id)

    def filters(self) -> Dict[str, Any]:
        filters = super().filters()
        if self.user_id:
            filters["user_id"] = self.user_id
        return filters

    def prepare(self, rows):
        return sorted(rows, key=lambda n: n.created_at, reverse=True)

    def add_notification(self, **fields) -> str:
        return self.add(**{**fields, "read": False})

    def update(self, doc_id: str, **fields) -> None:
        # read never goes back to false
        if fields.get("read") is False:
            fields.pop("read")
        super().update(doc_id, **fields)

    def mark_as_read(self, notification_id: str) -> None:
        if self.get(notification_id) is None:
            raise NotFoundError("Notification", notification_id)
        self.update(notification_id, read=True)

    def mark_all_as_read(self) -> int:
        unread = self.unread()
        for notification in unread:
            self.update(notification.id, read=True)
        return len(unread)

    def unread(self) -> List[NotificationOut]:
        return [n for n in self.items if not n.read]


def create_expiry_notification(
    store: NotificationStore,
    user_id: str,
    student_name: str,
    course_name: str,
    days_remaining: int,
) -> str:
    return store.add_notification(
        user_id=user_id,
        type="expiry",
        title="Kurs Bitiyor",
        message=f"{student_name} öğrencisinin {course_name} kursu {days_remaining} gün içinde bitiyor.",
        link="/enrollments",
    )


def create_payment_notification(
    store: NotificationStore,
    user_id: str,
    student_name: str,
    amount: float,
    is_overdue: bool,
) -> str:
    amount_text = f"{amount:,.0f}".replace(",", ".")
    return store.add_notification(
        user_id=user_id,
        type="payment",
        title="Gecikmiş Ödeme" if is_overdue else "Ödeme Hatırlatması",
        message=(
            f"{student_name} için {amount_text}₺ tutarında "
            f"{'gecikmiş' if is_overdue else 'bekleyen'} ödeme var."
        ),
        link="/payments",
    )
