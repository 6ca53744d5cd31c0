# blueprints/grades/routes.py — 학생: 강좌별 내 성적
from __future__ import annotations
from flask import Blueprint, render_template, g

from edulms.helpers.auth import roles_required, current_workspace
from edulms.services.grades import grade_rows, course_stats

bp = Blueprint("grades", __name__)


@bp.get("/student/courses/<course_id>/grades", endpoint="home")
@roles_required("student")
def page(course_id: str):
    ws = current_workspace()
    course = ws.course(course_id)
    rows = grade_rows(ws, course_id, g.user["id"])
    return render_template(
        "grades.html",
        course=course,
        rows=rows,
        stats=course_stats(rows, len(ws.course_quizzes(course_id))),
    )
