# services/grades.py — 성적/통계 집계 (학생 성적 페이지, 강사 수강생 페이지)
from __future__ import annotations
from typing import Any, Dict, List, Optional

from edulms.helpers.utils import percentage, round_half_up
from edulms.services.workspace import Workspace


def letter_grade(pct: Optional[float]) -> str:
    if pct is None:
        return "-"
    return "A" if pct >= 90 else "B" if pct >= 80 else "C" if pct >= 70 else "D" if pct >= 60 else "F"


def grade_color(pct: float) -> str:
    if pct >= 90:
        return "text-green"
    if pct >= 80:
        return "text-blue"
    if pct >= 70:
        return "text-yellow"
    if pct >= 60:
        return "text-orange"
    return "text-red"


def performance_badge(score: float) -> Dict[str, str]:
    if score >= 90:
        return {"label": "Excellent", "css": "badge-green"}
    if score >= 80:
        return {"label": "Good", "css": "badge-blue"}
    if score >= 70:
        return {"label": "Average", "css": "badge-yellow"}
    return {"label": "Needs Improvement", "css": "badge-red"}


def _course_attempts(ws: Workspace, course_id: str, student_id: str):
    """(attempt, quiz) 쌍. 삭제된 퀴즈의 응시 기록은 빠진다."""
    quizzes = {q["id"]: q for q in ws.course_quizzes(course_id)}
    return [
        (a, quizzes[a["quiz_id"]])
        for a in ws.attempts
        if a["student_id"] == student_id and a["quiz_id"] in quizzes
    ]


def grade_rows(ws: Workspace, course_id: str, student_id: str) -> List[Dict[str, Any]]:
    """강좌 내 응시 기록 → 성적 행 (제출 시각 순)"""
    rows = []
    for a, quiz in _course_attempts(ws, course_id, student_id):
        pct = percentage(a["score"], a["total_marks"])
        rows.append({
            "id": a["id"],
            "quiz_id": a["quiz_id"],
            "quiz_title": quiz["title"],
            "score": a["score"],
            "total_marks": a["total_marks"],
            "percentage": pct,
            "grade_letter": letter_grade(pct),
            "color": grade_color(pct),
            "submitted_at": a["submitted_at"],
        })
    rows.sort(key=lambda r: r["submitted_at"])
    return rows


def course_stats(rows: List[Dict[str, Any]], total_quizzes: int) -> Optional[Dict[str, Any]]:
    """
    학생 한 명의 강좌 통계. 응시 기록이 없으면 None.
    - average_score / course_percentage: 퀴즈별 % 의 평균 (반올림)
    - highest_score: 가장 높은 %
    - course_grade: 반올림 전 평균으로 매긴 등급
    """
    if not rows:
        return None
    avg = sum(r["percentage"] for r in rows) / len(rows)
    completed = len(rows)
    return {
        "total_quizzes": total_quizzes,
        "completed_quizzes": completed,
        "average_score": round_half_up(avg),
        "highest_score": max(r["percentage"] for r in rows),
        "course_grade": letter_grade(avg),
        "course_percentage": round_half_up(avg),
        "progress": min(percentage(completed, total_quizzes), 100),
    }


def course_students(ws: Workspace, course_id: str, q: str = "") -> List[Dict[str, Any]]:
    """수강생 목록 + 응시 횟수/평균/최근 활동. q 는 이름·이메일 부분 일치(대소문자 무시)."""
    q = (q or "").strip().lower()
    students = []
    for e in ws.course_enrollments(course_id):
        user = ws.user(e["student_id"])
        if not user:
            continue
        if q and q not in user["full_name"].lower() and q not in user["email"].lower():
            continue
        rows = grade_rows(ws, course_id, user["id"])
        avg = round_half_up(sum(r["percentage"] for r in rows) / len(rows)) if rows else 0
        last = max([r["submitted_at"] for r in rows], default=e["enrolled_at"])
        students.append({
            "id": user["id"],
            "full_name": user["full_name"],
            "email": user["email"],
            "enrolled_at": e["enrolled_at"],
            "quiz_attempts": len(rows),
            "average_score": avg,
            "last_activity": last,
            "status": e.get("status") or "active",
            "performance": performance_badge(avg),
        })
    return students


def class_stats(students: List[Dict[str, Any]]) -> Dict[str, int]:
    avg = round_half_up(sum(s["average_score"] for s in students) / len(students)) if students else 0
    return {
        "total_students": len(students),
        "average_score": avg,
        "active_students": sum(1 for s in students if s["status"] == "active"),
        "total_attempts": sum(s["quiz_attempts"] for s in students),
    }
