# blueprints/materials/routes.py — 학습자료 (강사: 등록/삭제, 학생: 열람/평가)
from __future__ import annotations
from flask import Blueprint, render_template, request, redirect, url_for, flash, g

from edulms.helpers.auth import roles_required, current_workspace
from edulms.helpers.utils import now, upload_metadata
from edulms.services.exceptions import ValidationError, NotFoundError

bp = Blueprint("materials", __name__)


def _course_material(ws, course_id: str, material_id: str):
    material = ws.material(material_id)
    if material["course_id"] != course_id:
        raise NotFoundError("material", material_id)
    return material


# ───────── 강사 ─────────
@bp.get("/tutor/courses/<course_id>/materials", endpoint="tutor_list")
@roles_required("tutor")
def tutor_list(course_id: str):
    ws = current_workspace()
    course = ws.course(course_id)
    return render_template(
        "tutor_materials.html",
        course=course,
        materials=ws.course_materials(course_id),
        creating=request.args.get("new") == "1",
    )


@bp.post("/tutor/courses/<course_id>/materials", endpoint="create")
@roles_required("tutor")
def create(course_id: str):
    ws = current_workspace()
    ws.course(course_id)
    try:
        # 파일 본문은 버리고 이름/형식/크기만 남긴다
        meta = upload_metadata(request.files.get("file"))
        material = ws.add_material(course_id, request.form, meta, now())
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("materials.tutor_list", course_id=course_id, new=1))
    flash(f"Material \"{material['title']}\" uploaded.", "success")
    return redirect(url_for("materials.tutor_list", course_id=course_id))


@bp.post("/tutor/courses/<course_id>/materials/<material_id>/delete", endpoint="delete")
@roles_required("tutor")
def delete(course_id: str, material_id: str):
    ws = current_workspace()
    _course_material(ws, course_id, material_id)
    ws.delete_material(material_id)
    flash("Material deleted.", "success")
    return redirect(url_for("materials.tutor_list", course_id=course_id))


# ───────── 학생 ─────────
@bp.get("/student/courses/<course_id>/materials", endpoint="student_list")
@roles_required("student")
def student_list(course_id: str):
    ws = current_workspace()
    course = ws.course(course_id)
    uid = g.user["id"]
    materials = [
        {**m, "assessment": ws.assessment_for(m["id"], uid)}
        for m in ws.course_materials(course_id)
    ]
    return render_template(
        "student_materials.html",
        course=course,
        materials=materials,
        rating_id=request.args.get("rate"),
    )


@bp.get("/student/courses/<course_id>/materials/<material_id>/view", endpoint="view")
@roles_required("student")
def view(course_id: str, material_id: str):
    material = _course_material(current_workspace(), course_id, material_id)
    flash(f"Opening: {material['title']}", "info")
    return redirect(url_for("materials.student_list", course_id=course_id))


@bp.post("/student/courses/<course_id>/materials/<material_id>/rate", endpoint="rate")
@roles_required("student")
def rate(course_id: str, material_id: str):
    ws = current_workspace()
    _course_material(ws, course_id, material_id)
    try:
        ws.add_assessment(material_id, g.user["id"], request.form, now())
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("materials.student_list", course_id=course_id, rate=material_id))
    flash("Thank you for your feedback!", "success")
    return redirect(url_for("materials.student_list", course_id=course_id))
