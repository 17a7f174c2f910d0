"""
Database models for quiz functionality.

A quiz owns an ordered list of multiple-choice questions, and each
question owns an ordered list of answer options. Any number of options
may be flagged correct.
"""
from factify import db
from factify.auth.models import utcnow


class Quiz(db.Model):
    """
    Model for quizzes.

    ``user_id`` is the owner and gates update/delete. Seeded demo
    quizzes have no owner. ``is_public`` marks quizzes that are listed
    for anonymous visitors.
    """
    __tablename__ = "quizzes"

    TITLE_MAX_LENGTH = 100
    DESCRIPTION_MAX_LENGTH = 500

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    description = db.Column(db.String(DESCRIPTION_MAX_LENGTH), nullable=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete='SET NULL'), nullable=True)
    is_public = db.Column(db.Boolean, default=False, nullable=False, index=True)
    created_date = db.Column(db.DateTime, default=utcnow, nullable=False)
    last_used_date = db.Column(db.DateTime, default=utcnow, nullable=False)

    # Relationships
    owner = db.relationship("User", back_populates="quizzes")
    questions = db.relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="Question.order_index",
    )

    __table_args__ = (
        db.Index('ix_quizzes_user_created', 'user_id', 'created_date'),
        db.Index('ix_quizzes_user_last_used', 'user_id', 'last_used_date'),
    )

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def is_owned_by(self, user_id) -> bool:
        return self.user_id is not None and self.user_id == user_id

    def get_total_points(self) -> int:
        """Calculate total points for all questions."""
        return sum(q.points for q in self.questions)

    def to_dict(self, include_answers: bool = True) -> dict:
        return {
            "quizId": self.id,
            "title": self.title,
            "description": self.description,
            "userId": self.user_id,
            "isPublic": self.is_public,
            "createdDate": self.created_date.isoformat() if self.created_date else None,
            "lastUsedDate": self.last_used_date.isoformat() if self.last_used_date else None,
            "questions": [q.to_dict(include_answers) for q in self.questions],
        }


class Question(db.Model):
    """Model for quiz questions."""
    __tablename__ = "quiz_questions"

    TEXT_MAX_LENGTH = 300

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    question_text = db.Column(db.String(TEXT_MAX_LENGTH), nullable=False)
    points = db.Column(db.Integer, nullable=False, default=1)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    # Relationships
    quiz = db.relationship("Quiz", back_populates="questions")
    options = db.relationship(
        "AnswerOption",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="AnswerOption.order_index",
    )

    __table_args__ = (
        db.Index('ix_quiz_questions_quiz_order', 'quiz_id', 'order_index'),
    )

    def __repr__(self) -> str:
        return f"<Question {self.id}: {self.question_text[:50]}>"

    def correct_option_ids(self) -> set:
        return {o.id for o in self.options if o.is_correct}

    def to_dict(self, include_answers: bool = True) -> dict:
        return {
            "questionId": self.id,
            "quizId": self.quiz_id,
            "questionText": self.question_text,
            "points": self.points,
            "options": [o.to_dict(include_answers) for o in self.options],
        }


class AnswerOption(db.Model):
    """Model for the answer options of a question."""
    __tablename__ = "quiz_answer_options"

    TEXT_MAX_LENGTH = 300

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey("quiz_questions.id", ondelete='CASCADE'), nullable=False, index=True)
    text = db.Column(db.String(TEXT_MAX_LENGTH), nullable=False)
    is_correct = db.Column(db.Boolean, default=False, nullable=False)
    order_index = db.Column(db.Integer, nullable=False, default=0)

    question = db.relationship("Question", back_populates="options")

    __table_args__ = (
        db.Index('ix_answer_options_question_order', 'question_id', 'order_index'),
    )

    def __repr__(self) -> str:
        return f"<AnswerOption {self.id}: {self.text[:50]}>"

    def to_dict(self, include_answers: bool = True) -> dict:
        data = {
            "optionId": self.id,
            "questionId": self.question_id,
            "text": self.text,
        }
        if include_answers:
            data["isCorrect"] = self.is_correct
        return data
