# blueprints/quizzes/routes.py — 퀴즈 (강사: 퀴즈/문항 관리, 학생: 응시/타이머/제출)
from __future__ import annotations
import logging

from flask import Blueprint, render_template, request, redirect, url_for, flash, g, jsonify

from edulms.helpers.auth import roles_required, current_workspace
from edulms.helpers.utils import now, percentage
from edulms.services.exceptions import ValidationError, NotFoundError, QuizStateError
from edulms.services.quiz import RUNNING

logger = logging.getLogger(__name__)

bp = Blueprint("quizzes", __name__)


def _course_quiz(ws, course_id: str, quiz_id: str):
    ws.course(course_id)
    quiz = ws.quiz(quiz_id)
    if quiz["course_id"] != course_id:
        raise NotFoundError("quiz", quiz_id)
    return quiz


def _posted_answers(form) -> dict:
    # 응시 폼: answer-<question_id>
    return {k[len("answer-"):]: v for k, v in form.items() if k.startswith("answer-")}


# ───────── 강사: 퀴즈 ─────────
@bp.get("/tutor/courses/<course_id>/quizzes", endpoint="tutor_list")
@roles_required("tutor")
def tutor_list(course_id: str):
    ws = current_workspace()
    course = ws.course(course_id)
    quizzes = [
        {
            **q,
            "question_count": len(ws.quiz_questions(q["id"])),
            "attempt_count": len(ws.quiz_attempts(q["id"])),
        }
        for q in ws.course_quizzes(course_id)
    ]
    return render_template(
        "tutor_quizzes.html",
        course=course,
        quizzes=quizzes,
        creating=request.args.get("new") == "1",
    )


@bp.post("/tutor/courses/<course_id>/quizzes", endpoint="create")
@roles_required("tutor")
def create(course_id: str):
    ws = current_workspace()
    ws.course(course_id)
    try:
        quiz = ws.add_quiz(course_id, request.form, now())
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("quizzes.tutor_list", course_id=course_id, new=1))
    flash(f"Quiz \"{quiz['title']}\" created. Add some questions next.", "success")
    return redirect(url_for("quizzes.questions", course_id=course_id, quiz_id=quiz["id"]))


@bp.post("/tutor/courses/<course_id>/quizzes/<quiz_id>/delete", endpoint="delete")
@roles_required("tutor")
def delete(course_id: str, quiz_id: str):
    ws = current_workspace()
    _course_quiz(ws, course_id, quiz_id)
    ws.delete_quiz(quiz_id)
    flash("Quiz deleted.", "success")
    return redirect(url_for("quizzes.tutor_list", course_id=course_id))


# ───────── 강사: 문항 ─────────
@bp.get("/tutor/courses/<course_id>/quizzes/<quiz_id>/questions", endpoint="questions")
@roles_required("tutor")
def questions(course_id: str, quiz_id: str):
    ws = current_workspace()
    quiz = _course_quiz(ws, course_id, quiz_id)
    return render_template(
        "quiz_questions.html",
        course=ws.course(course_id),
        quiz=quiz,
        questions=ws.quiz_questions(quiz_id),
        qtype=request.args.get("type", "multiple_choice"),
    )


@bp.post("/tutor/courses/<course_id>/quizzes/<quiz_id>/questions", endpoint="add_question")
@roles_required("tutor")
def add_question(course_id: str, quiz_id: str):
    ws = current_workspace()
    _course_quiz(ws, course_id, quiz_id)
    form = {**request.form.to_dict(), "options": request.form.getlist("options")}
    try:
        ws.add_question(quiz_id, form)
    except ValidationError as e:
        flash(e.message, "error")
        return redirect(url_for("quizzes.questions", course_id=course_id, quiz_id=quiz_id,
                                type=form.get("question_type") or "multiple_choice"))
    flash("Question added.", "success")
    return redirect(url_for("quizzes.questions", course_id=course_id, quiz_id=quiz_id))


@bp.post("/tutor/courses/<course_id>/quizzes/<quiz_id>/questions/<question_id>/delete",
         endpoint="delete_question")
@roles_required("tutor")
def delete_question(course_id: str, quiz_id: str, question_id: str):
    ws = current_workspace()
    _course_quiz(ws, course_id, quiz_id)
    ws.delete_question(quiz_id, question_id)
    flash("Question deleted.", "success")
    return redirect(url_for("quizzes.questions", course_id=course_id, quiz_id=quiz_id))


# ───────── 학생: 목록 ─────────
@bp.get("/student/courses/<course_id>/quizzes", endpoint="student_list")
@roles_required("student")
def student_list(course_id: str):
    ws = current_workspace()
    course = ws.course(course_id)
    uid = g.user["id"]
    quizzes = []
    for q in ws.course_quizzes(course_id):
        attempt = ws.attempt_for(q["id"], uid)
        quizzes.append({
            **q,
            "question_count": len(ws.quiz_questions(q["id"])),
            "attempt": attempt,
            "percentage": percentage(attempt["score"], attempt["total_marks"]) if attempt else None,
        })
    return render_template("student_quizzes.html", course=course, quizzes=quizzes)


# ───────── 학생: 응시 ─────────
@bp.post("/student/courses/<course_id>/quizzes/<quiz_id>/start", endpoint="start")
@roles_required("student")
def start(course_id: str, quiz_id: str):
    ws = current_workspace()
    _course_quiz(ws, course_id, quiz_id)
    try:
        ws.start_quiz(quiz_id, g.user["id"], now())
    except QuizStateError as e:
        flash(e.message, "error")
        return redirect(url_for("quizzes.student_list", course_id=course_id))
    return redirect(url_for("quizzes.take", course_id=course_id, quiz_id=quiz_id))


def _open_run(ws, quiz_id: str):
    run = ws.current_run(g.user["id"], now())
    if run is None or run.quiz_id != quiz_id:
        return None
    return run


@bp.get("/student/courses/<course_id>/quizzes/<quiz_id>/take", endpoint="take")
@roles_required("student")
def take(course_id: str, quiz_id: str):
    ws = current_workspace()
    quiz = _course_quiz(ws, course_id, quiz_id)
    run = _open_run(ws, quiz_id)
    if run is None:
        flash("This quiz is not open. Start it from the quiz list.", "error")
        return redirect(url_for("quizzes.student_list", course_id=course_id))
    return render_template(
        "quiz_take.html",
        course=ws.course(course_id),
        quiz=quiz,
        run=run,
        status=run.status(now()),
    )


@bp.post("/student/courses/<course_id>/quizzes/<quiz_id>/take/answers", endpoint="save_answers")
@roles_required("student")
def save_answers(course_id: str, quiz_id: str):
    """자동 저장 (JSON). 본문: {"answers": {question_id: answer}}"""
    ws = current_workspace()
    _course_quiz(ws, course_id, quiz_id)
    run = _open_run(ws, quiz_id)
    if run is None:
        return jsonify(QuizStateError("No quiz is open.", state="not_started").to_dict()), 404
    payload = request.get_json(silent=True) or {}
    answers = payload.get("answers") or {}
    if not isinstance(answers, dict):
        return jsonify(ValidationError("answers must be an object.", field="answers").to_dict()), 400
    try:
        run.record_answers({str(k): str(v) for k, v in answers.items()})
    except QuizStateError as e:
        return jsonify(e.to_dict()), 409
    return jsonify(run.status(now()))


@bp.get("/student/courses/<course_id>/quizzes/<quiz_id>/take/status", endpoint="status")
@roles_required("student")
def status(course_id: str, quiz_id: str):
    ws = current_workspace()
    _course_quiz(ws, course_id, quiz_id)
    run = _open_run(ws, quiz_id)
    if run is None:
        return jsonify(QuizStateError("No quiz is open.", state="not_started").to_dict()), 404
    return jsonify(run.status(now()))


@bp.post("/student/courses/<course_id>/quizzes/<quiz_id>/take/submit", endpoint="submit")
@roles_required("student")
def submit(course_id: str, quiz_id: str):
    ws = current_workspace()
    _course_quiz(ws, course_id, quiz_id)
    uid = g.user["id"]
    run = ws.quiz_runs.get(uid)
    if run is None or run.quiz_id != quiz_id:
        flash("This quiz is not open. Start it from the quiz list.", "error")
        return redirect(url_for("quizzes.student_list", course_id=course_id))
    try:
        # 0초에 페이지 스크립트가 보낸 답안도 받아준다
        attempt = ws.submit_quiz(uid, _posted_answers(request.form), now())
    except QuizStateError as e:
        flash(e.message, "error")
        return redirect(url_for("quizzes.take", course_id=course_id, quiz_id=quiz_id))
    flash(f"Quiz submitted! Your score: {attempt['score']}/{attempt['total_marks']}", "success")
    return redirect(url_for("quizzes.take", course_id=course_id, quiz_id=quiz_id))


@bp.post("/student/courses/<course_id>/quizzes/<quiz_id>/take/close", endpoint="close")
@roles_required("student")
def close(course_id: str, quiz_id: str):
    ws = current_workspace()
    _course_quiz(ws, course_id, quiz_id)
    run = ws.quiz_runs.get(g.user["id"])
    if run is not None and run.quiz_id == quiz_id:
        if run.state == RUNNING:
            logger.info("quiz %s closed by %s without submitting", quiz_id, g.user["id"])
        ws.close_quiz(g.user["id"])
    return redirect(url_for("quizzes.student_list", course_id=course_id))
