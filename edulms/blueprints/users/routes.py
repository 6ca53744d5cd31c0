# blueprints/users/routes.py — 관리자: 사용자 관리 (데모 모드)
from __future__ import annotations
from flask import Blueprint, render_template, request, redirect, url_for, flash

from edulms.helpers.auth import roles_required, current_workspace
from edulms.helpers.utils import now
from edulms.models import ROLES
from edulms.services.exceptions import ValidationError, NotFoundError

bp = Blueprint("users", __name__, url_prefix="/admin/users")

EMPTY_FORM = {"email": "", "full_name": "", "role": "student"}


@bp.get("/", endpoint="home")
@roles_required("admin")
def page():
    ws = current_workspace()
    q = (request.args.get("q") or "").strip()
    role = request.args.get("role", "all")

    # 수정 다이얼로그: ?edit=<id>
    editing = ws.user(request.args.get("edit")) if request.args.get("edit") else None
    form = {k: editing[k] for k in EMPTY_FORM} if editing else dict(EMPTY_FORM)

    counts = ws.role_counts()
    return render_template(
        "users.html",
        users=ws.list_users(q, role),
        total_cnt=sum(counts.values()),
        student_cnt=counts.get("student", 0),
        tutor_cnt=counts.get("tutor", 0),
        admin_cnt=counts.get("admin", 0),
        roles=ROLES,
        editing=editing,
        form=form,
        q=q,
        role=role,
    )


@bp.post("/", endpoint="create")
@roles_required("admin")
def create():
    try:
        user = current_workspace().add_user(request.form, now())
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("users.home"))
    flash(f"User {user['full_name']} created.", "success")
    return redirect(url_for("users.home"))


@bp.post("/<user_id>/edit", endpoint="update")
@roles_required("admin")
def update(user_id: str):
    try:
        user = current_workspace().update_user(user_id, request.form, now())
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("users.home", edit=user_id))
    flash(f"User {user['full_name']} updated.", "success")
    return redirect(url_for("users.home"))


@bp.post("/<user_id>/delete", endpoint="delete")
@roles_required("admin")
def delete(user_id: str):
    try:
        current_workspace().delete_user(user_id)
    except NotFoundError as e:
        flash(e.message, "error")
        return redirect(url_for("users.home"))
    flash("User deleted.", "success")
    return redirect(url_for("users.home"))
