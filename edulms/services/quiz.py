# services/quiz.py — 문항 검증 / 채점 / 응시 타이머
from __future__ import annotations
import logging
import math
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Any

from edulms.demo_data import TRUE_FALSE
from edulms.helpers.utils import new_id, to_iso, parse_positive_int
from edulms.models import QUESTION_TYPES
from edulms.services.exceptions import ValidationError, QuizStateError

logger = logging.getLogger(__name__)

NOT_STARTED = "not_started"
RUNNING = "running"
SUBMITTED = "submitted"

# 0초에 페이지 스크립트가 보낸 제출은 이 안에서 받아준다
SUBMIT_GRACE_SECONDS = 5


def score_answers(questions: List[Dict[str, Any]], answers: Dict[str, str]) -> int:
    """
    정답과 완전히 같은 문자열(공백/대소문자 그대로)인 문항의 배점 합계.
    답하지 않은 문항은 0점.
    """
    return sum(q["marks"] for q in questions if answers.get(q["id"]) == q["correct_answer"])


def build_question(quiz_id: str, form: Dict[str, Any]) -> Dict[str, Any]:
    """
    문항 추가 폼 → QuizQuestion 레코드
    - multiple_choice: 빈 보기는 버리고 2개 이상 필요
    - true_false: 보기는 항상 True/False
    - short_answer: 보기 없음
    - 보기가 있으면 정답은 보기 중 하나여야 함
    """
    text = (form.get("question") or "").strip()
    if not text:
        raise ValidationError("Question text is required.", field="question")

    qtype = (form.get("question_type") or "multiple_choice").strip()
    if qtype not in QUESTION_TYPES:
        raise ValidationError(f"Unknown question type: {qtype}", field="question_type")

    if qtype == "multiple_choice":
        options = [o.strip() for o in (form.get("options") or []) if o and o.strip()]
        if len(options) < 2:
            raise ValidationError("Multiple choice questions need at least two options.", field="options")
    elif qtype == "true_false":
        options = list(TRUE_FALSE)
    else:
        options = []

    correct = (form.get("correct_answer") or "").strip()
    if not correct:
        raise ValidationError("Correct answer is required.", field="correct_answer")
    if options and correct not in options:
        raise ValidationError("Correct answer must be one of the options.", field="correct_answer")

    marks = parse_positive_int(str(form.get("marks") or "1"))
    if marks is None:
        raise ValidationError("Marks must be a positive whole number.", field="marks")

    return {
        "id": new_id("question"),
        "quiz_id": quiz_id,
        "question": text,
        "question_type": qtype,
        "options": options,
        "correct_answer": correct,
        "marks": marks,
    }


class QuizRun:
    """
    학생 한 명의 퀴즈 응시 다이얼로그 상태.

    not_started → running → submitted 로만 진행한다. 제한 시간이 있으면
    start 시점에 마감 시각을 잡고, 마감이 지난 뒤 처음 관측될 때(tick)
    그때까지 저장된 답안으로 자동 제출한다. 일시정지/재개는 없다.
    """

    def __init__(self, quiz: Dict[str, Any], questions: List[Dict[str, Any]], student_id: str):
        self.quiz = quiz
        self.questions = questions
        self.student_id = student_id
        self.answers: Dict[str, str] = {}
        self.state = NOT_STARTED
        self.started_at: Optional[datetime] = None
        self.deadline: Optional[datetime] = None
        self.attempt: Optional[Dict[str, Any]] = None
        self.auto_submitted = False

    @property
    def quiz_id(self) -> str:
        return self.quiz["id"]

    @property
    def question_ids(self) -> List[str]:
        return [q["id"] for q in self.questions]

    def start(self, now: datetime) -> None:
        if self.state != NOT_STARTED:
            raise QuizStateError("Quiz has already been started.", state=self.state)
        self.state = RUNNING
        self.started_at = now
        limit = self.quiz.get("time_limit")
        if limit:
            self.deadline = now + timedelta(minutes=int(limit))

    def time_left(self, now: datetime) -> Optional[int]:
        # 제한 시간이 없거나 이미 제출했으면 None
        if self.state != RUNNING or self.deadline is None:
            return None
        remaining = (self.deadline - now).total_seconds()
        return max(0, int(math.ceil(remaining)))

    def is_expired(self, now: datetime) -> bool:
        return self.state == RUNNING and self.deadline is not None and now >= self.deadline

    def record_answers(self, answers: Dict[str, str]) -> None:
        if self.state != RUNNING:
            raise QuizStateError("Quiz is not running.", state=self.state)
        known = set(self.question_ids)
        for qid, answer in answers.items():
            if qid in known:
                self.answers[qid] = answer

    def submit(self, now: datetime, answers: Optional[Dict[str, str]] = None, auto: bool = False) -> Dict[str, Any]:
        if self.state != RUNNING:
            raise QuizStateError("Quiz is not running.", state=self.state)
        if self.deadline is not None and now > self.deadline + timedelta(seconds=SUBMIT_GRACE_SECONDS):
            # 마감 후 늦게 온 답안은 버리고 저장된 답안으로 자동 제출
            answers, auto = None, True
        if answers:
            self.record_answers(answers)

        score = score_answers(self.questions, self.answers)
        self.attempt = {
            "id": new_id("attempt"),
            "quiz_id": self.quiz_id,
            "student_id": self.student_id,
            "answers": dict(self.answers),
            "score": score,
            "total_marks": self.quiz.get("total_marks") or 0,
            "submitted_at": to_iso(now),
        }
        self.state = SUBMITTED
        self.deadline = None
        self.auto_submitted = auto
        logger.info(
            "quiz %s submitted by %s (%s): %s/%s",
            self.quiz_id, self.student_id, "auto" if auto else "manual",
            score, self.attempt["total_marks"],
        )
        return self.attempt

    def tick(self, now: datetime) -> Optional[Dict[str, Any]]:
        """마감이 지났으면 자동 제출하고 응시 기록을 반환."""
        if self.is_expired(now):
            return self.submit(now, auto=True)
        return None

    def status(self, now: datetime) -> Dict[str, Any]:
        return {
            "quiz_id": self.quiz_id,
            "state": self.state,
            "time_left": self.time_left(now),
            "answered": len(self.answers),
            "question_count": len(self.questions),
            "score": self.attempt["score"] if self.attempt else None,
            "total_marks": self.attempt["total_marks"] if self.attempt else None,
            "auto_submitted": self.auto_submitted,
        }
