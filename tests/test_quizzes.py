# tests/test_quizzes.py
"""
Quiz Tests: question building, scoring, the timed run and the quiz pages.
"""

from datetime import datetime, timedelta, timezone

import pytest

from edulms.demo_data import STUDENT1_ID, STUDENT2_ID
from edulms.services.exceptions import ValidationError, QuizStateError, NotFoundError
from edulms.helpers.utils import format_time
from edulms.services.quiz import QuizRun, build_question, score_answers, NOT_STARTED, RUNNING, SUBMITTED

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


class TestScoring:
    """Tests for score_answers."""

    def test_exact_match_only(self, ws):
        questions = ws.quiz_questions("quiz-3")

        assert score_answers(questions, {"q8": "2x", "q9": "True", "q10": "0"}) == 30
        assert score_answers(questions, {"q8": "2X", "q9": "true", "q10": " 0"}) == 0

    def test_unanswered_scores_zero(self, ws):
        questions = ws.quiz_questions("quiz-2")

        assert score_answers(questions, {}) == 0
        assert score_answers(questions, {"q7": "Hash table"}) == 10


class TestBuildQuestion:
    """Tests for question form validation."""

    def test_multiple_choice_drops_blank_options(self):
        q = build_question("quiz-1", {
            "question": "Pick one", "question_type": "multiple_choice",
            "options": ["A", "  ", "B", ""], "correct_answer": "B", "marks": "3",
        })

        assert q["options"] == ["A", "B"]
        assert q["marks"] == 3
        assert q["quiz_id"] == "quiz-1"

    def test_true_false_options_fixed(self):
        q = build_question("quiz-1", {
            "question": "Sky is blue", "question_type": "true_false",
            "options": ["x", "y"], "correct_answer": "True",
        })

        assert q["options"] == ["True", "False"]
        assert q["marks"] == 1

    def test_short_answer_has_no_options(self):
        q = build_question("quiz-1", {
            "question": "2+2?", "question_type": "short_answer", "correct_answer": "4",
        })

        assert q["options"] == []

    @pytest.mark.parametrize("form, field", [
        ({"question": "", "correct_answer": "A", "options": ["A", "B"]}, "question"),
        ({"question": "Q", "question_type": "essay", "correct_answer": "A"}, "question_type"),
        ({"question": "Q", "options": ["A", " "], "correct_answer": "A"}, "options"),
        ({"question": "Q", "options": ["A", "B"], "correct_answer": ""}, "correct_answer"),
        ({"question": "Q", "options": ["A", "B"], "correct_answer": "C"}, "correct_answer"),
        ({"question": "Q", "question_type": "true_false", "correct_answer": "Yes"}, "correct_answer"),
        ({"question": "Q", "options": ["A", "B"], "correct_answer": "A", "marks": "0"}, "marks"),
        ({"question": "Q", "options": ["A", "B"], "correct_answer": "A", "marks": "1.5"}, "marks"),
    ])
    def test_validation(self, form, field):
        with pytest.raises(ValidationError) as exc:
            build_question("quiz-1", form)

        assert exc.value.field == field


class TestQuizRun:
    """Tests for the quiz countdown state machine."""

    @pytest.mark.parametrize("seconds, text", [(3600, "60:00"), (125, "2:05"), (9, "0:09"), (0, "0:00"), (-3, "0:00")])
    def test_countdown_text(self, seconds, text):
        assert format_time(seconds) == text

    def _run(self, ws, quiz_id="quiz-3"):
        return QuizRun(ws.quiz(quiz_id), ws.quiz_questions(quiz_id), STUDENT1_ID)

    def test_start_sets_countdown(self, ws):
        run = self._run(ws)
        assert run.state == NOT_STARTED

        run.start(T0)

        assert run.state == RUNNING
        assert run.time_left(T0) == 3600
        assert run.time_left(T0 + timedelta(seconds=90)) == 3510

    def test_no_countdown_without_time_limit(self, ws):
        quiz = ws.add_quiz("course-1", {"title": "Untimed"}, T0)
        run = QuizRun(quiz, [], STUDENT1_ID)
        run.start(T0)

        assert run.time_left(T0 + timedelta(days=1)) is None
        assert run.tick(T0 + timedelta(days=1)) is None
        assert run.state == RUNNING

    def test_manual_submit(self, ws):
        run = self._run(ws)
        run.start(T0)
        run.record_answers({"q8": "2x", "unknown": "ignored"})

        attempt = run.submit(T0 + timedelta(minutes=5), {"q9": "False"})

        assert run.state == SUBMITTED
        assert attempt["score"] == 10
        assert attempt["total_marks"] == 30
        assert attempt["answers"] == {"q8": "2x", "q9": "False"}
        assert attempt["submitted_at"] == "2024-03-01T09:05:00Z"
        assert run.auto_submitted is False
        assert run.time_left(T0) is None

    def test_auto_submit_when_time_runs_out(self, ws):
        run = self._run(ws)
        run.start(T0)
        run.record_answers({"q8": "2x", "q10": "0"})

        assert run.tick(T0 + timedelta(minutes=59, seconds=59)) is None
        attempt = run.tick(T0 + timedelta(minutes=60))

        assert attempt["score"] == 20
        assert run.state == SUBMITTED
        assert run.auto_submitted is True

    def test_cannot_submit_twice(self, ws):
        run = self._run(ws)
        run.start(T0)
        run.submit(T0)

        with pytest.raises(QuizStateError):
            run.submit(T0)
        with pytest.raises(QuizStateError):
            run.record_answers({"q8": "2x"})

    def test_cannot_submit_before_start(self, ws):
        with pytest.raises(QuizStateError):
            self._run(ws).submit(T0)

    def test_status(self, ws):
        run = self._run(ws)
        run.start(T0)
        run.record_answers({"q8": "2x"})

        st = run.status(T0 + timedelta(seconds=30))

        assert st == {
            "quiz_id": "quiz-3",
            "state": "running",
            "time_left": 3570,
            "answered": 1,
            "question_count": 3,
            "score": None,
            "total_marks": None,
            "auto_submitted": False,
        }


class TestWorkspaceQuizzes:
    """Tests for quiz and question records."""

    def test_add_quiz(self, ws):
        quiz = ws.add_quiz("course-1", {"title": "Loops", "time_limit": "15"}, T0)

        assert quiz["total_marks"] == 0
        assert quiz["time_limit"] == 15
        assert ws.course_quizzes("course-1")[0] is quiz

    @pytest.mark.parametrize("limit", ["0", "-5", "ten", "2.5"])
    def test_bad_time_limit(self, ws, limit):
        with pytest.raises(ValidationError):
            ws.add_quiz("course-1", {"title": "Loops", "time_limit": limit}, T0)

    def test_question_marks_adjust_total(self, ws):
        q = ws.add_question("quiz-1", {
            "question": "Extra", "question_type": "short_answer", "correct_answer": "x", "marks": "4",
        })
        assert ws.quiz("quiz-1")["total_marks"] == 24

        ws.delete_question("quiz-1", q["id"])
        assert ws.quiz("quiz-1")["total_marks"] == 20

    def test_delete_question_from_other_quiz(self, ws):
        with pytest.raises(NotFoundError):
            ws.delete_question("quiz-1", "q8")

    def test_one_attempt_per_quiz(self, ws):
        with pytest.raises(QuizStateError):
            ws.start_quiz("quiz-1", STUDENT1_ID, T0)

    def test_start_replaces_open_run(self, ws):
        first = ws.start_quiz("quiz-3", STUDENT1_ID, T0)
        ws.add_quiz("course-2", {"title": "Second"}, T0)
        second_id = ws.course_quizzes("course-2")[0]["id"]

        second = ws.start_quiz(second_id, STUDENT1_ID, T0)

        assert ws.quiz_runs[STUDENT1_ID] is second
        assert first is not second

    def test_expired_run_is_recorded_when_observed(self, ws):
        ws.start_quiz("quiz-2", STUDENT2_ID, T0)

        run = ws.current_run(STUDENT2_ID, T0 + timedelta(minutes=46))

        assert run.state == SUBMITTED
        attempt = ws.attempt_for("quiz-2", STUDENT2_ID)
        assert attempt["score"] == 0
        assert attempt["total_marks"] == 25

    def test_close_discards_run(self, ws):
        ws.start_quiz("quiz-3", STUDENT1_ID, T0)
        ws.close_quiz(STUDENT1_ID)

        assert ws.current_run(STUDENT1_ID, T0) is None
        assert ws.attempt_for("quiz-3", STUDENT1_ID) is None


class TestTutorQuizPanel:
    """Tests for the tutor quiz and question pages."""

    def test_list(self, tutor_client):
        resp = tutor_client.get("/tutor/courses/course-1/quizzes")

        assert resp.status_code == 200
        assert b"Programming Fundamentals Quiz" in resp.data
        assert b"3 questions" in resp.data
        assert b"3 attempts" in resp.data

    def test_create_goes_to_questions(self, tutor_client):
        resp = tutor_client.post("/tutor/courses/course-1/quizzes", data={"title": "Recursion", "time_limit": "20"})

        assert resp.status_code == 302
        assert "/questions" in resp.headers["Location"]

    def test_add_question(self, tutor_client, workspace_of):
        resp = tutor_client.post("/tutor/courses/course-1/quizzes/quiz-1/questions", data={
            "question": "Which is a loop keyword?",
            "question_type": "multiple_choice",
            "options": ["for", "def", "", "class"],
            "correct_answer": "for",
            "marks": "2",
        }, follow_redirects=True)

        assert b"Question added." in resp.data
        ws = workspace_of(tutor_client)
        assert ws.quiz("quiz-1")["total_marks"] == 22
        assert ws.quiz_questions("quiz-1")[-1]["options"] == ["for", "def", "class"]

    def test_add_question_error_keeps_type(self, tutor_client):
        resp = tutor_client.post("/tutor/courses/course-1/quizzes/quiz-1/questions", data={
            "question": "", "question_type": "short_answer", "correct_answer": "x",
        })

        assert "type=short_answer" in resp.headers["Location"]

    def test_delete_question(self, tutor_client, workspace_of):
        tutor_client.post("/tutor/courses/course-1/quizzes/quiz-1/questions/q3/delete")

        assert workspace_of(tutor_client).quiz("quiz-1")["total_marks"] == 10

    def test_delete_quiz(self, tutor_client, workspace_of):
        resp = tutor_client.post("/tutor/courses/course-1/quizzes/quiz-2/delete", follow_redirects=True)

        assert b"Quiz deleted." in resp.data
        assert [q["id"] for q in workspace_of(tutor_client).course_quizzes("course-1")] == ["quiz-1"]


class TestStudentQuizPanel:
    """Tests for taking a quiz from the student pages."""

    BASE = "/student/courses/course-2/quizzes/quiz-3"

    def test_list_shows_completed_and_pending(self, student_client):
        resp = student_client.get("/student/courses/course-1/quizzes")

        assert b"Completed" in resp.data
        assert b"18/20" in resp.data
        assert b"(90%)" in resp.data

        resp = student_client.get("/student/courses/course-2/quizzes")
        assert b"Pending" in resp.data
        assert b"Start quiz" in resp.data

    def test_start_and_take(self, student_client):
        resp = student_client.post(f"{self.BASE}/start")
        assert resp.headers["Location"].endswith(f"{self.BASE}/take")

        resp = student_client.get(f"{self.BASE}/take")
        assert resp.status_code == 200
        assert b"What is the derivative of x^2?" in resp.data
        assert b"60:00" in resp.data
        assert b"left < 300" in resp.data

    def test_completed_quiz_cannot_be_started(self, student_client):
        resp = student_client.post("/student/courses/course-1/quizzes/quiz-1/start", follow_redirects=True)

        assert b"You have already completed this quiz." in resp.data

    def test_take_without_run_redirects(self, student_client):
        resp = student_client.get(f"{self.BASE}/take")

        assert resp.status_code == 302

    def test_status_counts_down(self, student_client, clock):
        student_client.post(f"{self.BASE}/start")
        clock.advance(seconds=75)

        data = student_client.get(f"{self.BASE}/take/status").get_json()

        assert data["state"] == "running"
        assert data["time_left"] == 3525

    def test_status_without_run(self, student_client):
        resp = student_client.get(f"{self.BASE}/take/status")

        assert resp.status_code == 404
        assert resp.get_json()["error"] == "QUIZ_STATE_ERROR"

    def test_submit(self, student_client, workspace_of):
        student_client.post(f"{self.BASE}/start")

        resp = student_client.post(f"{self.BASE}/take/submit", data={
            "answer-q8": "2x", "answer-q9": "False", "answer-q10": "0",
        }, follow_redirects=True)

        assert b"Quiz submitted! Your score: 20/30" in resp.data
        attempt = workspace_of(student_client).attempt_for("quiz-3", STUDENT1_ID)
        assert attempt["score"] == 20

    def test_autosave_then_auto_submit(self, student_client, clock, workspace_of):
        student_client.post(f"{self.BASE}/start")
        saved = student_client.post(f"{self.BASE}/take/answers", json={"answers": {"q8": "2x"}})
        assert saved.get_json()["answered"] == 1

        clock.advance(minutes=61)
        data = student_client.get(f"{self.BASE}/take/status").get_json()

        assert data["state"] == "submitted"
        assert data["auto_submitted"] is True
        assert data["score"] == 10
        assert workspace_of(student_client).attempt_for("quiz-3", STUDENT1_ID)["score"] == 10

        page = student_client.get(f"{self.BASE}/take")
        assert b"Time ran out" in page.data

    def test_autosave_rejects_bad_payload(self, student_client):
        student_client.post(f"{self.BASE}/start")

        resp = student_client.post(f"{self.BASE}/take/answers", json={"answers": ["2x"]})

        assert resp.status_code == 400

    def test_submit_at_zero_keeps_posted_answers(self, student_client, clock, workspace_of):
        student_client.post(f"{self.BASE}/start")
        clock.advance(minutes=60)

        student_client.post(f"{self.BASE}/take/submit", data={"answer-q8": "2x", "answer-q9": "True"})

        assert workspace_of(student_client).attempt_for("quiz-3", STUDENT1_ID)["score"] == 20

    def test_close_discards_run(self, student_client, workspace_of):
        student_client.post(f"{self.BASE}/start")

        resp = student_client.post(f"{self.BASE}/take/close")

        assert resp.headers["Location"].endswith("/student/courses/course-2/quizzes")
        ws = workspace_of(student_client)
        assert STUDENT1_ID not in ws.quiz_runs
        assert ws.attempt_for("quiz-3", STUDENT1_ID) is None


class TestQuizDeadline:
    """Tests that a started countdown cannot be reset or outrun."""

    BASE = "/student/courses/course-2/quizzes/quiz-3"

    def test_restart_after_expiry_records_saved_answers(self, ws):
        run = ws.start_quiz("quiz-3", STUDENT1_ID, T0)
        run.record_answers({"q8": "2x"})

        with pytest.raises(QuizStateError):
            ws.start_quiz("quiz-3", STUDENT1_ID, T0 + timedelta(minutes=90))

        attempt = ws.attempt_for("quiz-3", STUDENT1_ID)
        assert attempt["score"] == 10
        assert run.auto_submitted is True

    def test_restart_while_running_keeps_timer(self, ws):
        first = ws.start_quiz("quiz-3", STUDENT1_ID, T0)

        again = ws.start_quiz("quiz-3", STUDENT1_ID, T0 + timedelta(minutes=20))

        assert again is first
        assert again.time_left(T0 + timedelta(minutes=20)) == 2400

    def test_late_submit_keeps_only_saved_answers(self, ws):
        run = QuizRun(ws.quiz("quiz-3"), ws.quiz_questions("quiz-3"), STUDENT1_ID)
        run.start(T0)
        run.record_answers({"q9": "True"})

        attempt = run.submit(T0 + timedelta(hours=5), {"q8": "2x", "q9": "True", "q10": "0"})

        assert attempt["score"] == 10
        assert attempt["answers"] == {"q9": "True"}
        assert run.auto_submitted is True

    def test_submit_within_grace_keeps_posted_answers(self, ws):
        run = QuizRun(ws.quiz("quiz-3"), ws.quiz_questions("quiz-3"), STUDENT1_ID)
        run.start(T0)

        attempt = run.submit(T0 + timedelta(minutes=60, seconds=2), {"q8": "2x"})

        assert attempt["score"] == 10
        assert run.auto_submitted is False

    def test_restart_via_panel_after_expiry(self, student_client, clock, workspace_of):
        student_client.post(f"{self.BASE}/start")
        student_client.post(f"{self.BASE}/take/answers", json={"answers": {"q8": "2x"}})
        clock.advance(minutes=90)

        resp = student_client.post(f"{self.BASE}/start", follow_redirects=True)

        assert b"You have already completed this quiz." in resp.data
        assert workspace_of(student_client).attempt_for("quiz-3", STUDENT1_ID)["score"] == 10

    def test_restart_via_panel_while_running(self, student_client, clock):
        student_client.post(f"{self.BASE}/start")
        clock.advance(minutes=10)

        resp = student_client.post(f"{self.BASE}/start")
        assert resp.headers["Location"].endswith(f"{self.BASE}/take")

        data = student_client.get(f"{self.BASE}/take/status").get_json()
        assert data["time_left"] == 3000

    def test_late_submit_via_panel(self, student_client, clock, workspace_of):
        student_client.post(f"{self.BASE}/start")
        clock.advance(hours=5)

        student_client.post(f"{self.BASE}/take/submit", data={
            "answer-q8": "2x", "answer-q9": "True", "answer-q10": "0",
        })

        attempt = workspace_of(student_client).attempt_for("quiz-3", STUDENT1_ID)
        assert attempt["score"] == 0
        assert attempt["answers"] == {}
