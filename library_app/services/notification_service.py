from datetime import datetime

from flask import current_app

from library_app.extensions import db
from library_app.models.notification_log import NotificationLog
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.notification_repo import NotificationRepo
from library_app.services.mail_service import MailService


class NotificationService:
    @staticmethod
    def run_overdue_check(now: datetime | None = None) -> dict:
        """Email every overdue borrower once and log each attempt.

        Borrowings that already have a successful ``overdue`` log are skipped;
        failed attempts are retried on the next run.
        """
        now = now or datetime.utcnow()
        overdue = BorrowingRepo.find_overdue(now)

        sent = 0
        failed = 0
        skipped = 0

        for b in overdue:
            if NotificationRepo.already_sent(b.id, "overdue"):
                skipped += 1
                continue

            to_email = b.user.email if b.user else None
            if not to_email:
                ok, err = False, "missing_email"
            else:
                subject, body = MailService.overdue_message(b)
                ok, err = MailService.send_email(to_email, subject, body)

            NotificationRepo.log(NotificationLog(
                borrowing_id=b.id,
                type="overdue",
                email=to_email,
                message="Reminder sent" if ok else "Reminder could not be sent",
                success=ok,
                error_message=err,
                sent_at=now,
            ))
            if ok:
                sent += 1
            else:
                failed += 1

        # single commit for all logs
        db.session.commit()

        result = {"overdue": len(overdue), "sent": sent, "failed": failed, "skipped": skipped}
        current_app.logger.info(
            f"[overdue_check] overdue={result['overdue']} sent={sent} failed={failed} skipped={skipped}"
        )
        return result
