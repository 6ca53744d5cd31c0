# services/workspace.py — 세션별 인메모리 데모 데이터
"""
브라우저 세션마다 데모 데이터 사본(Workspace)을 하나씩 둔다.

- 레코드는 평범한 dict 이고, 관계(course→tutor, material→course,
  question→quiz, reply→parent)는 id 선형 탐색으로만 맞춘다.
- 컬렉션 간 정합성은 보장하지 않는다 (퀴즈를 지워도 문항/응시 기록은 남음).
- WorkspaceRegistry 는 앱 단위 보관소로, 오래 안 쓴 사본부터 버린다.
"""
from __future__ import annotations
import copy
import logging
import re
from collections import OrderedDict
from datetime import datetime
from typing import Any, Dict, List, Optional

from edulms import demo_data
from edulms.helpers.utils import new_id, to_iso, parse_positive_int
from edulms.models import ROLES
from edulms.services.exceptions import NotFoundError, ValidationError, QuizStateError
from edulms.services.quiz import QuizRun, build_question, RUNNING

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
Record = Dict[str, Any]


def _require(form: Dict[str, Any], field: str, label: str) -> str:
    value = (form.get(field) or "").strip()
    if not value:
        raise ValidationError(f"{label} is required.", field=field)
    return value


class Workspace:
    def __init__(self, ws_id: str):
        self.id = ws_id
        self.users: List[Record] = copy.deepcopy(demo_data.DEMO_USERS)
        self.courses: List[Record] = copy.deepcopy(demo_data.DEMO_COURSES)
        self.enrollments: List[Record] = copy.deepcopy(demo_data.DEMO_ENROLLMENTS)
        self.materials: List[Record] = copy.deepcopy(demo_data.DEMO_MATERIALS)
        self.assessments: List[Record] = copy.deepcopy(demo_data.DEMO_ASSESSMENTS)
        self.quizzes: List[Record] = copy.deepcopy(demo_data.DEMO_QUIZZES)
        self.questions: List[Record] = copy.deepcopy(demo_data.DEMO_QUESTIONS)
        self.attempts: List[Record] = copy.deepcopy(demo_data.DEMO_ATTEMPTS)
        self.posts: List[Record] = copy.deepcopy(demo_data.DEMO_POSTS)
        # student_id → 열려 있는 응시 다이얼로그
        self.quiz_runs: Dict[str, QuizRun] = {}

    # ------------------------------------------------------------------
    # 공통 조회
    # ------------------------------------------------------------------
    @staticmethod
    def find(rows: List[Record], record_id: Optional[str]) -> Optional[Record]:
        return next((r for r in rows if r["id"] == record_id), None)

    def user(self, user_id: str) -> Optional[Record]:
        return self.find(self.users, user_id)

    def course(self, course_id: str) -> Record:
        c = self.find(self.courses, course_id)
        if not c:
            raise NotFoundError("course", course_id)
        return c

    def quiz(self, quiz_id: str) -> Record:
        q = self.find(self.quizzes, quiz_id)
        if not q:
            raise NotFoundError("quiz", quiz_id)
        return q

    def material(self, material_id: str) -> Record:
        m = self.find(self.materials, material_id)
        if not m:
            raise NotFoundError("material", material_id)
        return m

    # ------------------------------------------------------------------
    # Users (admin)
    # ------------------------------------------------------------------
    def list_users(self, q: str = "", role: str = "all") -> List[Record]:
        rows = self.users
        if role in ROLES:
            rows = [u for u in rows if u["role"] == role]
        q = (q or "").strip().lower()
        if q:
            rows = [u for u in rows if q in u["full_name"].lower() or q in u["email"].lower()]
        return rows

    def role_counts(self) -> Dict[str, int]:
        counts = {r: 0 for r in ROLES}
        for u in self.users:
            counts[u["role"]] = counts.get(u["role"], 0) + 1
        return counts

    def _user_fields(self, form: Dict[str, Any]) -> Dict[str, str]:
        email = _require(form, "email", "Email")
        if not EMAIL_RE.match(email):
            raise ValidationError("Enter a valid email address.", field="email")
        full_name = _require(form, "full_name", "Full name")
        role = (form.get("role") or "student").strip()
        if role not in ROLES:
            raise ValidationError(f"Unknown role: {role}", field="role")
        return {"email": email, "full_name": full_name, "role": role}

    def add_user(self, form: Dict[str, Any], now: datetime) -> Record:
        fields = self._user_fields(form)
        ts = to_iso(now)
        user = {"id": new_id("demo"), **fields, "created_at": ts, "updated_at": ts}
        self.users.insert(0, user)
        logger.info("user %s created (%s)", user["id"], user["role"])
        return user

    def update_user(self, user_id: str, form: Dict[str, Any], now: datetime) -> Record:
        user = self.user(user_id)
        if not user:
            raise NotFoundError("user", user_id)
        user.update(self._user_fields(form), updated_at=to_iso(now))
        logger.info("user %s updated", user_id)
        return user

    def delete_user(self, user_id: str) -> None:
        user = self.user(user_id)
        if not user:
            raise NotFoundError("user", user_id)
        self.users.remove(user)
        logger.info("user %s deleted", user_id)

    # ------------------------------------------------------------------
    # Courses
    # ------------------------------------------------------------------
    def tutor_courses(self, tutor_id: str) -> List[Record]:
        return [c for c in self.courses if c["tutor_id"] == tutor_id]

    def add_course(self, tutor_id: str, form: Dict[str, Any], now: datetime) -> Record:
        title = _require(form, "title", "Course title")
        ts = to_iso(now)
        course = {
            "id": new_id("course"),
            "title": title,
            "description": (form.get("description") or "").strip(),
            "tutor_id": tutor_id,
            "created_at": ts,
            "updated_at": ts,
        }
        self.courses.insert(0, course)
        logger.info("course %s created by %s", course["id"], tutor_id)
        return course

    def student_courses(self, student_id: str) -> List[Record]:
        """수강 중인 강좌 카드: 강사명/자료 수/퀴즈 수 포함"""
        enrolled_ids = [e["course_id"] for e in self.enrollments if e["student_id"] == student_id]
        cards = []
        for c in self.courses:
            if c["id"] not in enrolled_ids:
                continue
            tutor = self.user(c["tutor_id"])
            cards.append({
                **c,
                "tutor_name": tutor["full_name"] if tutor else "Unknown",
                "material_count": sum(1 for m in self.materials if m["course_id"] == c["id"]),
                "quiz_count": sum(1 for q in self.quizzes if q["course_id"] == c["id"]),
            })
        return cards

    def course_enrollments(self, course_id: str) -> List[Record]:
        return [e for e in self.enrollments if e["course_id"] == course_id]

    # ------------------------------------------------------------------
    # Materials / content assessments
    # ------------------------------------------------------------------
    def course_materials(self, course_id: str) -> List[Record]:
        return [m for m in self.materials if m["course_id"] == course_id]

    def add_material(self, course_id: str, form: Dict[str, Any], file_meta, now: datetime) -> Record:
        title = _require(form, "title", "Title")
        file_url, file_type, file_size = file_meta
        material = {
            "id": new_id("material"),
            "course_id": course_id,
            "title": title,
            "description": (form.get("description") or "").strip(),
            "file_url": file_url,
            "file_type": file_type,
            "file_size": file_size,
            "created_at": to_iso(now),
        }
        self.materials.insert(0, material)
        logger.info("material %s added to %s", material["id"], course_id)
        return material

    def delete_material(self, material_id: str) -> None:
        self.materials.remove(self.material(material_id))
        logger.info("material %s deleted", material_id)

    def assessment_for(self, material_id: str, student_id: str) -> Optional[Record]:
        return next(
            (a for a in self.assessments if a["material_id"] == material_id and a["student_id"] == student_id),
            None,
        )

    def add_assessment(self, material_id: str, student_id: str, form: Dict[str, Any], now: datetime) -> Record:
        self.material(material_id)
        if self.assessment_for(material_id, student_id):
            raise ValidationError("You have already rated this material.", field="rating")
        raw = str(form.get("rating") or "").strip()
        if not raw.isdigit() or not 1 <= int(raw) <= 5:
            raise ValidationError("Please choose a rating from 1 to 5 stars.", field="rating")
        assessment = {
            "id": new_id("assessment"),
            "material_id": material_id,
            "student_id": student_id,
            "rating": int(raw),
            "feedback": (form.get("feedback") or "").strip() or None,
            "created_at": to_iso(now),
        }
        self.assessments.append(assessment)
        logger.info("material %s rated %s by %s", material_id, assessment["rating"], student_id)
        return assessment

    # ------------------------------------------------------------------
    # Quizzes / questions
    # ------------------------------------------------------------------
    def course_quizzes(self, course_id: str) -> List[Record]:
        return [q for q in self.quizzes if q["course_id"] == course_id]

    def quiz_questions(self, quiz_id: str) -> List[Record]:
        return [q for q in self.questions if q["quiz_id"] == quiz_id]

    def quiz_attempts(self, quiz_id: str) -> List[Record]:
        return [a for a in self.attempts if a["quiz_id"] == quiz_id]

    def add_quiz(self, course_id: str, form: Dict[str, Any], now: datetime) -> Record:
        title = _require(form, "title", "Quiz title")
        raw_limit = (form.get("time_limit") or "").strip()
        time_limit = parse_positive_int(raw_limit)
        if raw_limit and time_limit is None:
            raise ValidationError("Time limit must be a positive number of minutes.", field="time_limit")
        quiz = {
            "id": new_id("quiz"),
            "course_id": course_id,
            "title": title,
            "description": (form.get("description") or "").strip(),
            "total_marks": 0,
            "time_limit": time_limit,
            "created_at": to_iso(now),
        }
        self.quizzes.insert(0, quiz)
        logger.info("quiz %s created in %s", quiz["id"], course_id)
        return quiz

    def delete_quiz(self, quiz_id: str) -> None:
        self.quizzes.remove(self.quiz(quiz_id))
        logger.info("quiz %s deleted", quiz_id)

    def add_question(self, quiz_id: str, form: Dict[str, Any]) -> Record:
        quiz = self.quiz(quiz_id)
        question = build_question(quiz_id, form)
        self.questions.append(question)
        quiz["total_marks"] = (quiz.get("total_marks") or 0) + question["marks"]
        logger.info("question %s added to %s (+%s marks)", question["id"], quiz_id, question["marks"])
        return question

    def delete_question(self, quiz_id: str, question_id: str) -> None:
        quiz = self.quiz(quiz_id)
        question = self.find(self.quiz_questions(quiz_id), question_id)
        if not question:
            raise NotFoundError("question", question_id)
        self.questions.remove(question)
        quiz["total_marks"] = (quiz.get("total_marks") or 0) - question["marks"]
        logger.info("question %s removed from %s (-%s marks)", question_id, quiz_id, question["marks"])

    # ------------------------------------------------------------------
    # Quiz taking
    # ------------------------------------------------------------------
    def attempt_for(self, quiz_id: str, student_id: str) -> Optional[Record]:
        return next(
            (a for a in self.attempts if a["quiz_id"] == quiz_id and a["student_id"] == student_id),
            None,
        )

    def start_quiz(self, quiz_id: str, student_id: str, now: datetime) -> QuizRun:
        quiz = self.quiz(quiz_id)
        # 마감이 지난 응시 창은 여기서 먼저 자동 제출된다
        open_run = self.current_run(student_id, now)
        if self.attempt_for(quiz_id, student_id):
            raise QuizStateError("You have already completed this quiz.", state="submitted")
        if open_run is not None and open_run.quiz_id == quiz_id and open_run.state == RUNNING:
            # 같은 퀴즈를 다시 시작해도 타이머는 그대로
            return open_run
        run = QuizRun(quiz, self.quiz_questions(quiz_id), student_id)
        run.start(now)
        # 다이얼로그는 하나만: 이전 응시 창은 버린다
        self.quiz_runs[student_id] = run
        return run

    def current_run(self, student_id: str, now: datetime) -> Optional[QuizRun]:
        """열린 응시 창. 마감이 지났으면 이 시점에 자동 제출된다."""
        run = self.quiz_runs.get(student_id)
        if run is not None:
            attempt = run.tick(now)
            if attempt:
                self.attempts.append(attempt)
        return run

    def submit_quiz(self, student_id: str, answers: Dict[str, str], now: datetime) -> Record:
        run = self.quiz_runs.get(student_id)
        if run is None:
            raise QuizStateError("No quiz is open.", state="not_started")
        attempt = run.submit(now, answers)
        self.attempts.append(attempt)
        return attempt

    def close_quiz(self, student_id: str) -> None:
        self.quiz_runs.pop(student_id, None)

    # ------------------------------------------------------------------
    # Forum
    # ------------------------------------------------------------------
    def course_posts(self, course_id: str) -> List[Record]:
        return [p for p in self.posts if p["course_id"] == course_id]

    def _post(self, course_id: str, user: Record, title: str, content: str,
              parent_id: Optional[str], now: datetime) -> Record:
        ts = to_iso(now)
        return {
            "id": new_id("reply" if parent_id else "post"),
            "course_id": course_id,
            "user_id": user["id"],
            "user_name": user["full_name"],
            "user_role": user["role"],
            "title": title,
            "content": content,
            "parent_id": parent_id,
            "created_at": ts,
            "updated_at": ts,
        }

    def add_post(self, course_id: str, user: Record, form: Dict[str, Any], now: datetime) -> Record:
        title = _require(form, "title", "Title")
        content = _require(form, "content", "Content")
        post = self._post(course_id, user, title, content, None, now)
        self.posts.insert(0, post)
        logger.info("forum post %s created in %s by %s", post["id"], course_id, user["id"])
        return post

    def add_reply(self, course_id: str, parent_id: str, user: Record, form: Dict[str, Any], now: datetime) -> Record:
        parent = self.find(self.course_posts(course_id), parent_id)
        if not parent or parent["parent_id"]:
            raise NotFoundError("post", parent_id)
        content = _require(form, "content", "Reply")
        reply = self._post(course_id, user, "", content, parent_id, now)
        self.posts.append(reply)
        logger.info("forum reply %s added to %s by %s", reply["id"], parent_id, user["id"])
        return reply


class WorkspaceRegistry:
    """앱 단위 보관소: ws_id → Workspace (LRU)"""

    def __init__(self, max_size: int = 500):
        self.max_size = max_size
        self._items: "OrderedDict[str, Workspace]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, ws_id: str) -> bool:
        return ws_id in self._items

    def get_or_create(self, ws_id: str) -> Workspace:
        ws = self._items.get(ws_id)
        if ws is None:
            ws = Workspace(ws_id)
            self._items[ws_id] = ws
            logger.debug("workspace %s seeded from demo data", ws_id)
            while len(self._items) > self.max_size:
                evicted, _ = self._items.popitem(last=False)
                logger.info("workspace %s evicted", evicted)
        else:
            self._items.move_to_end(ws_id)
        return ws

    def drop(self, ws_id: str) -> None:
        self._items.pop(ws_id, None)
