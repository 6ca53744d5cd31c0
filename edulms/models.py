# models.py — DB 스키마 선언
# 화면(패널)은 세션별 인메모리 데모 데이터(services/workspace.py)를 사용하고,
# 이 테이블들은 `flask create-schema` 에서만 생성된다.
from __future__ import annotations

from datetime import datetime

from edulms.extensions import db

ROLES = ("admin", "tutor", "student")
QUESTION_TYPES = ("multiple_choice", "true_false", "short_answer")


# =============================================================================
# Users / Courses
# =============================================================================
class User(db.Model):
    __tablename__ = "users"
    __table_args__ = (
        db.Index("ix_users_role", "role"),
        db.UniqueConstraint("email", name="uq_users_email"),
    )

    id = db.Column(db.String(64), primary_key=True)
    email = db.Column(db.String(190), nullable=False)
    full_name = db.Column(db.String(120), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="student")  # admin|tutor|student
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    courses = db.relationship("Course", back_populates="tutor")

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"


class Course(db.Model):
    __tablename__ = "courses"
    __table_args__ = (db.Index("ix_courses_tutor", "tutor_id"),)

    id = db.Column(db.String(64), primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    tutor_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    tutor = db.relationship("User", back_populates="courses")
    enrollments = db.relationship("CourseEnrollment", back_populates="course", cascade="all,delete-orphan")
    materials = db.relationship("LearningMaterial", back_populates="course", cascade="all,delete-orphan")
    quizzes = db.relationship("Quiz", back_populates="course", cascade="all,delete-orphan")

    def __repr__(self) -> str:
        return f"<Course id={self.id} title={self.title!r}>"


class CourseEnrollment(db.Model):
    __tablename__ = "course_enrollments"
    __table_args__ = (
        db.Index("ix_enrollments_course", "course_id"),
        db.Index("ix_enrollments_student", "student_id"),
        db.UniqueConstraint("course_id", "student_id", name="uq_enrollment_course_student"),
    )

    id = db.Column(db.String(64), primary_key=True)
    course_id = db.Column(db.String(64), db.ForeignKey("courses.id"), nullable=False)
    student_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False)
    enrolled_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    status = db.Column(db.String(20), nullable=False, default="active")  # active|inactive

    course = db.relationship("Course", back_populates="enrollments")
    student = db.relationship("User")

    def __repr__(self) -> str:
        return f"<CourseEnrollment id={self.id} course_id={self.course_id} student_id={self.student_id}>"


# =============================================================================
# Materials / Assessments
# =============================================================================
class LearningMaterial(db.Model):
    __tablename__ = "learning_materials"
    __table_args__ = (db.Index("ix_materials_course", "course_id"),)

    id = db.Column(db.String(64), primary_key=True)
    course_id = db.Column(db.String(64), db.ForeignKey("courses.id"), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    file_url = db.Column(db.String(255))
    file_type = db.Column(db.String(120))
    file_size = db.Column(db.BigInteger)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    course = db.relationship("Course", back_populates="materials")
    assessments = db.relationship("ContentAssessment", back_populates="material", cascade="all,delete-orphan")

    def __repr__(self) -> str:
        return f"<LearningMaterial id={self.id} title={self.title!r}>"


class ContentAssessment(db.Model):
    __tablename__ = "content_assessments"
    __table_args__ = (
        db.Index("ix_cassess_material", "material_id"),
        db.Index("ix_cassess_student", "student_id"),
        db.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_cassess_rating"),
    )

    id = db.Column(db.String(64), primary_key=True)
    material_id = db.Column(db.String(64), db.ForeignKey("learning_materials.id"), nullable=False)
    student_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    feedback = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    material = db.relationship("LearningMaterial", back_populates="assessments")
    student = db.relationship("User")

    def __repr__(self) -> str:
        return f"<ContentAssessment id={self.id} material_id={self.material_id} rating={self.rating}>"


# =============================================================================
# Quizzes
# =============================================================================
class Quiz(db.Model):
    __tablename__ = "quizzes"
    __table_args__ = (db.Index("ix_quizzes_course", "course_id"),)

    id = db.Column(db.String(64), primary_key=True)
    course_id = db.Column(db.String(64), db.ForeignKey("courses.id"), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    total_marks = db.Column(db.Integer, nullable=False, default=0)
    time_limit = db.Column(db.Integer)  # 제한 시간 (분)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    course = db.relationship("Course", back_populates="quizzes")
    questions = db.relationship("QuizQuestion", back_populates="quiz", cascade="all,delete-orphan")
    attempts = db.relationship("QuizAttempt", back_populates="quiz", cascade="all,delete-orphan")

    def __repr__(self) -> str:
        return f"<Quiz id={self.id} title={self.title!r} total_marks={self.total_marks}>"


class QuizQuestion(db.Model):
    __tablename__ = "quiz_questions"
    __table_args__ = (db.Index("ix_qquestions_quiz", "quiz_id"),)

    id = db.Column(db.String(64), primary_key=True)
    quiz_id = db.Column(db.String(64), db.ForeignKey("quizzes.id"), nullable=False)
    question = db.Column(db.Text, nullable=False)
    question_type = db.Column(db.String(20), nullable=False)  # multiple_choice|true_false|short_answer
    options = db.Column(db.JSON)
    correct_answer = db.Column(db.Text, nullable=False)
    marks = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    quiz = db.relationship("Quiz", back_populates="questions")

    def __repr__(self) -> str:
        return f"<QuizQuestion id={self.id} quiz_id={self.quiz_id} type={self.question_type}>"


class QuizAttempt(db.Model):
    __tablename__ = "quiz_attempts"
    __table_args__ = (
        db.Index("ix_qattempts_quiz", "quiz_id"),
        db.Index("ix_qattempts_student", "student_id"),
    )

    id = db.Column(db.String(64), primary_key=True)
    quiz_id = db.Column(db.String(64), db.ForeignKey("quizzes.id"), nullable=False)
    student_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False)
    answers = db.Column(db.JSON)
    score = db.Column(db.Integer, nullable=False, default=0)
    total_marks = db.Column(db.Integer, nullable=False, default=0)
    submitted_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    quiz = db.relationship("Quiz", back_populates="attempts")
    student = db.relationship("User")

    def __repr__(self) -> str:
        return f"<QuizAttempt id={self.id} quiz_id={self.quiz_id} score={self.score}/{self.total_marks}>"


# =============================================================================
# Forum
# =============================================================================
class ForumPost(db.Model):
    __tablename__ = "forum_posts"
    __table_args__ = (
        db.Index("ix_fposts_course", "course_id"),
        db.Index("ix_fposts_parent", "parent_id"),
        db.Index("ix_fposts_created_at", "created_at"),
    )

    id = db.Column(db.String(64), primary_key=True)
    course_id = db.Column(db.String(64), db.ForeignKey("courses.id"), nullable=False)
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False)
    title = db.Column(db.String(200), nullable=False, default="")
    content = db.Column(db.Text, nullable=False)
    parent_id = db.Column(db.String(64), db.ForeignKey("forum_posts.id"))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = db.relationship("User")
    replies = db.relationship("ForumPost", backref=db.backref("parent", remote_side=[id]))

    def __repr__(self) -> str:
        return f"<ForumPost id={self.id} course_id={self.course_id} parent_id={self.parent_id}>"
