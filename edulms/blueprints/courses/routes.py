# blueprints/courses/routes.py — 강사: 내 강좌 관리 / 학생: 수강 강좌 목록
from __future__ import annotations
from flask import Blueprint, render_template, request, redirect, url_for, flash, g

from edulms.helpers.auth import roles_required, current_workspace
from edulms.helpers.utils import now
from edulms.services.exceptions import ValidationError

bp = Blueprint("courses", __name__)


@bp.get("/tutor/courses", endpoint="tutor_home")
@roles_required("tutor")
def tutor_home():
    courses = current_workspace().tutor_courses(g.user["id"])
    return render_template("tutor_courses.html", courses=courses, creating=request.args.get("new") == "1")


@bp.post("/tutor/courses", endpoint="create")
@roles_required("tutor")
def create():
    try:
        course = current_workspace().add_course(g.user["id"], request.form, now())
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("courses.tutor_home", new=1))
    flash(f"Course \"{course['title']}\" created.", "success")
    return redirect(url_for("courses.tutor_home"))


@bp.get("/student/courses", endpoint="student_home")
@roles_required("student")
def student_home():
    courses = current_workspace().student_courses(g.user["id"])
    return render_template("student_courses.html", courses=courses)
