from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from library_app.services.dashboard_service import DashboardService
from library_app.utils.policy import admin_required, get_current_user

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard_bp.get("/admin")
@admin_required
def admin_dashboard():
    return jsonify(DashboardService.admin_dashboard())


@dashboard_bp.get("/user")
@jwt_required()
def user_dashboard():
    return jsonify(DashboardService.user_dashboard(get_current_user()))
