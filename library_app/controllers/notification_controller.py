from flask import Blueprint, jsonify

from library_app.services.notification_service import NotificationService
from library_app.utils.policy import admin_required

notif_bp = Blueprint("notifications", __name__, url_prefix="/notifications")


@notif_bp.post("/run-overdue-check")
@admin_required
def run_overdue_check():
    result = NotificationService.run_overdue_check()
    return jsonify({"message": "Overdue check completed", "data": result})
