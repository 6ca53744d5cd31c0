# blueprints/dashboard/routes.py — 역할별 첫 화면 분기
from __future__ import annotations
from flask import Blueprint, redirect, url_for, g, abort

from edulms.helpers.auth import login_required

bp = Blueprint("dashboard", __name__)

HOME_BY_ROLE = {
    "admin": "users.home",
    "tutor": "courses.tutor_home",
    "student": "courses.student_home",
}


@bp.get("/", endpoint="home")
@login_required
def home():
    endpoint = HOME_BY_ROLE.get(g.user["role"])
    if not endpoint:
        abort(403)
    return redirect(url_for(endpoint))
