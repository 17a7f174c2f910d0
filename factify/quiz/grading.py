"""
Quiz grading.

A submission is a flat collection of selected option identifiers with no
indication of which question each one answers. Grading splits it per
question by option ownership and awards a question only when the chosen
options are exactly its correct options. There is no partial credit.
"""
from dataclasses import dataclass, field
from typing import Iterable, List


@dataclass
class QuestionResult:
    question_id: int
    correct: bool
    points: int
    points_earned: int

    def to_dict(self) -> dict:
        return {
            "questionId": self.question_id,
            "correct": self.correct,
            "points": self.points,
            "pointsEarned": self.points_earned,
        }


@dataclass
class GradeResult:
    score: int = 0
    total: int = 0
    points: int = 0
    max_points: int = 0
    results: List[QuestionResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "total": self.total,
            "points": self.points,
            "maxPoints": self.max_points,
            "results": [r.to_dict() for r in self.results],
        }


def grade_submission(quiz, selected_option_ids: Iterable[int]) -> GradeResult:
    """
    Grade ``selected_option_ids`` against ``quiz``.

    ``score`` counts fully-correct questions out of ``total`` questions;
    ``points``/``maxPoints`` carry the same outcome weighted by each
    question's point value. Identifiers that belong to no question of
    the quiz are ignored, as are duplicates.
    """
    selected = set(selected_option_ids)
    result = GradeResult()

    for question in quiz.questions:
        option_ids = {o.id for o in question.options}
        chosen = selected & option_ids
        correct = chosen == question.correct_option_ids()

        earned = question.points if correct else 0
        result.total += 1
        result.max_points += question.points
        if correct:
            result.score += 1
            result.points += earned
        result.results.append(QuestionResult(question.id, correct, question.points, earned))

    return result
