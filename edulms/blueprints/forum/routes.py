# blueprints/forum/routes.py — 강좌 토론 게시판 (학생/강사)
from __future__ import annotations
from flask import Blueprint, render_template, request, redirect, url_for, flash, g

from edulms.helpers.auth import roles_required, current_workspace
from edulms.helpers.utils import now
from edulms.services.exceptions import ValidationError, NotFoundError
from edulms.services.forum import organize_posts, initials, post_date, reply_label

bp = Blueprint("forum", __name__, url_prefix="/courses/<course_id>/forum")


@bp.get("/", endpoint="home")
@roles_required("student", "tutor")
def page(course_id: str):
    ws = current_workspace()
    course = ws.course(course_id)
    back = "courses.tutor_home" if g.user["role"] == "tutor" else "courses.student_home"
    return render_template(
        "forum.html",
        course=course,
        posts=organize_posts(ws.course_posts(course_id)),
        composing=request.args.get("new") == "1",
        replying_to=request.args.get("reply"),
        back_endpoint=back,
        initials=initials,
        post_date=post_date,
        reply_label=reply_label,
    )


@bp.post("/", endpoint="create")
@roles_required("student", "tutor")
def create(course_id: str):
    ws = current_workspace()
    ws.course(course_id)
    try:
        ws.add_post(course_id, g.user, request.form, now())
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("forum.home", course_id=course_id, new=1))
    flash("Discussion posted.", "success")
    return redirect(url_for("forum.home", course_id=course_id))


@bp.post("/<post_id>/reply", endpoint="reply")
@roles_required("student", "tutor")
def reply(course_id: str, post_id: str):
    ws = current_workspace()
    ws.course(course_id)
    try:
        ws.add_reply(course_id, post_id, g.user, request.form, now())
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("forum.home", course_id=course_id, reply=post_id))
    except NotFoundError as e:
        flash(e.message, "error")
        return redirect(url_for("forum.home", course_id=course_id))
    flash("Reply posted.", "success")
    return redirect(url_for("forum.home", course_id=course_id))
