"""
Data access for quizzes.

Everything that writes the quiz tree goes through QuizRepository so that
each operation ends in exactly one commit (or one rollback).
"""
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from factify import db
from factify.auth.models import utcnow
from factify.quiz.models import AnswerOption, Question, Quiz
from factify.quiz.payloads import NEW_ID, OptionPayload, QuestionPayload, QuizPayload

COPY_SUFFIX = " Copy"


class ReconciliationError(ValueError):
    """An update referenced entities that do not belong to the quiz."""

    field = "questions"

    def to_dict(self) -> dict:
        return {"message": str(self), "errors": {self.field: [str(self)]}}


class UnknownQuestionError(ReconciliationError):
    def __init__(self, question_id: int):
        self.question_id = question_id
        super().__init__(f"Question {question_id} does not belong to this quiz")


class UnknownOptionError(ReconciliationError):
    field = "options"

    def __init__(self, question_id: int, option_id: int):
        self.question_id = question_id
        self.option_id = option_id
        super().__init__(f"Option {option_id} does not belong to question {question_id}")


def _with_tree(query):
    return query.options(selectinload(Quiz.questions).selectinload(Question.options))


class QuizRepository:
    """CRUD access to quizzes, their questions and answer options."""

    def __init__(self, session=None):
        self.session = session or db.session

    # -- reads ---------------------------------------------------------------

    def get_quiz(self, quiz_id: int) -> Optional[Quiz]:
        return _with_tree(self.session.query(Quiz)).filter(Quiz.id == quiz_id).first()

    def get_quizzes_by_user(self, user_id: int) -> List[Quiz]:
        """Quizzes owned by ``user_id``, newest first."""
        return (
            _with_tree(self.session.query(Quiz))
            .filter(Quiz.user_id == user_id)
            .order_by(Quiz.created_date.desc(), Quiz.id.desc())
            .all()
        )

    def get_public_quizzes(self) -> List[Quiz]:
        return (
            _with_tree(self.session.query(Quiz))
            .filter(Quiz.is_public.is_(True))
            .order_by(Quiz.created_date, Quiz.id)
            .all()
        )

    # -- writes --------------------------------------------------------------

    def add_quiz(self, payload: QuizPayload, owner_id: Optional[int]) -> Quiz:
        now = utcnow()
        quiz = Quiz(
            title=payload.title,
            description=payload.description,
            is_public=payload.is_public,
            user_id=owner_id,
            created_date=now,
            last_used_date=now,
        )
        for index, incoming in enumerate(payload.questions):
            quiz.questions.append(self._build_question(incoming, index))

        self.session.add(quiz)
        self._commit()
        return quiz

    def update_quiz(self, quiz: Quiz, payload: QuizPayload) -> Quiz:
        """
        Converge ``quiz`` to the complete representation in ``payload``.

        Entities are matched by identifier: unchanged ones keep their ids,
        new ones (id 0) are inserted and stored ones missing from the
        payload are deleted. Identifiers that match nothing raise a
        ReconciliationError before any change is made.
        """
        existing = {q.id: q for q in quiz.questions}
        self._check_identifiers(existing, payload.questions)

        quiz.title = payload.title
        quiz.description = payload.description
        quiz.is_public = payload.is_public

        keep = {q.question_id for q in payload.questions if q.question_id != NEW_ID}
        for question in list(quiz.questions):
            if question.id not in keep:
                quiz.questions.remove(question)

        for index, incoming in enumerate(payload.questions):
            if incoming.question_id == NEW_ID:
                quiz.questions.append(self._build_question(incoming, index))
                continue
            question = existing[incoming.question_id]
            question.question_text = incoming.question_text
            question.points = incoming.points
            question.order_index = index
            self._reconcile_options(question, incoming.options)

        self._commit()
        return quiz

    def duplicate_quiz(self, source: Quiz, owner_id: int) -> Quiz:
        """Deep copy ``source`` for ``owner_id``. The source is only read."""
        now = utcnow()
        copy = Quiz(
            title=self._copy_title(source.title),
            description=source.description,
            is_public=False,
            user_id=owner_id,
            created_date=now,
            last_used_date=now,
        )
        for question in source.questions:
            copy.questions.append(Question(
                question_text=question.question_text,
                points=question.points,
                order_index=question.order_index,
                options=[
                    AnswerOption(text=o.text, is_correct=o.is_correct, order_index=o.order_index)
                    for o in question.options
                ],
            ))

        self.session.add(copy)
        self._commit()
        return copy

    def delete_quiz(self, quiz: Quiz) -> None:
        self.session.delete(quiz)
        self._commit()

    def touch(self, quiz: Quiz) -> None:
        """Record that the quiz was just used."""
        quiz.last_used_date = utcnow()
        self._commit()

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _copy_title(title: str) -> str:
        limit = Quiz.TITLE_MAX_LENGTH - len(COPY_SUFFIX)
        return title[:limit] + COPY_SUFFIX

    @staticmethod
    def _build_option(incoming: OptionPayload, index: int) -> AnswerOption:
        return AnswerOption(text=incoming.text, is_correct=incoming.is_correct, order_index=index)

    def _build_question(self, incoming: QuestionPayload, index: int) -> Question:
        return Question(
            question_text=incoming.question_text,
            points=incoming.points,
            order_index=index,
            options=[self._build_option(o, i) for i, o in enumerate(incoming.options)],
        )

    @staticmethod
    def _check_identifiers(existing: dict, questions: List[QuestionPayload]) -> None:
        for incoming in questions:
            if incoming.question_id == NEW_ID:
                for option in incoming.options:
                    if option.option_id != NEW_ID:
                        raise UnknownOptionError(NEW_ID, option.option_id)
                continue

            question = existing.get(incoming.question_id)
            if question is None:
                raise UnknownQuestionError(incoming.question_id)

            option_ids = {o.id for o in question.options}
            for option in incoming.options:
                if option.option_id != NEW_ID and option.option_id not in option_ids:
                    raise UnknownOptionError(question.id, option.option_id)

    def _reconcile_options(self, question: Question, incoming_options: List[OptionPayload]) -> None:
        existing = {o.id: o for o in question.options}
        keep = {o.option_id for o in incoming_options if o.option_id != NEW_ID}

        for option in list(question.options):
            if option.id not in keep:
                question.options.remove(option)

        for index, incoming in enumerate(incoming_options):
            if incoming.option_id == NEW_ID:
                question.options.append(self._build_option(incoming, index))
            else:
                option = existing[incoming.option_id]
                option.text = incoming.text
                option.is_correct = incoming.is_correct
                option.order_index = index

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
