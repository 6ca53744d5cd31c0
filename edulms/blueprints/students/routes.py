# blueprints/students/routes.py — 강사: 수강생 현황 / 개별 성적
from __future__ import annotations
from flask import Blueprint, render_template, request

from edulms.helpers.auth import roles_required, current_workspace
from edulms.services.grades import course_students, class_stats, grade_rows, performance_badge

bp = Blueprint("students", __name__)


@bp.get("/tutor/courses/<course_id>/students", endpoint="home")
@roles_required("tutor")
def page(course_id: str):
    ws = current_workspace()
    course = ws.course(course_id)
    q = (request.args.get("q") or "").strip()

    # 통계는 검색과 무관하게 전체 수강생 기준
    everyone = course_students(ws, course_id)
    students = course_students(ws, course_id, q) if q else everyone

    selected, grades = None, []
    sid = request.args.get("student")
    if sid:
        selected = next((s for s in everyone if s["id"] == sid), None)
        if selected:
            grades = [
                {**r, "performance": performance_badge(r["percentage"])}
                for r in grade_rows(ws, course_id, sid)
            ]

    return render_template(
        "tutor_students.html",
        course=course,
        students=students,
        stats=class_stats(everyone),
        q=q,
        selected=selected,
        grades=grades,
    )
