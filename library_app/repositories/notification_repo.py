from library_app.models.notification_log import NotificationLog
from library_app.extensions import db


class NotificationRepo:
    @staticmethod
    def already_sent(borrowing_id: int, notif_type: str = "overdue") -> bool:
        return NotificationLog.query.filter_by(
            borrowing_id=borrowing_id, type=notif_type, success=True
        ).first() is not None

    @staticmethod
    def log(entry: NotificationLog, commit: bool = False):
        db.session.add(entry)
        if commit:
            db.session.commit()
        return entry
