"""
Test cases for grading and the take-quiz endpoints.
"""
from conftest import quiz_payload
from factify.quiz.grading import grade_submission
from factify.quiz.models import AnswerOption, Question, Quiz


def _single_question_quiz():
    """One question with options A (correct), B and C."""
    question = Question(id=1, question_text='Pick A', points=1, options=[
        AnswerOption(id=10, text='A', is_correct=True),
        AnswerOption(id=11, text='B', is_correct=False),
        AnswerOption(id=12, text='C', is_correct=False),
    ])
    return Quiz(id=1, title='Letters', questions=[question])


def _two_question_quiz():
    return Quiz(id=2, title='Mixed', questions=[
        Question(id=1, question_text='Single', points=1, options=[
            AnswerOption(id=10, text='right', is_correct=True),
            AnswerOption(id=11, text='wrong', is_correct=False),
        ]),
        Question(id=2, question_text='Multiple', points=3, options=[
            AnswerOption(id=20, text='right 1', is_correct=True),
            AnswerOption(id=21, text='right 2', is_correct=True),
            AnswerOption(id=22, text='wrong', is_correct=False),
        ]),
    ])


class TestGrading:
    """Test cases for grade_submission."""

    def test_exact_correct_answer_scores(self):
        result = grade_submission(_single_question_quiz(), [10])
        assert (result.score, result.total) == (1, 1)

    def test_extra_wrong_answer_scores_nothing(self):
        result = grade_submission(_single_question_quiz(), [10, 11])
        assert (result.score, result.total) == (0, 1)

    def test_empty_submission_scores_nothing(self):
        result = grade_submission(_single_question_quiz(), [])
        assert (result.score, result.total) == (0, 1)

    def test_duplicates_are_ignored(self):
        result = grade_submission(_single_question_quiz(), [10, 10])
        assert result.score == 1

    def test_unrelated_ids_are_ignored(self):
        result = grade_submission(_single_question_quiz(), [10, 999])
        assert result.score == 1

    def test_missing_one_of_several_correct_options(self):
        result = grade_submission(_two_question_quiz(), [10, 20])
        assert (result.score, result.total) == (1, 2)
        assert (result.points, result.max_points) == (1, 4)

    def test_weighted_points_follow_question_values(self):
        result = grade_submission(_two_question_quiz(), [11, 20, 21])
        assert (result.score, result.total) == (1, 2)
        assert (result.points, result.max_points) == (3, 4)
        assert [r.correct for r in result.results] == [False, True]
        assert [r.points_earned for r in result.results] == [0, 3]

    def test_quiz_without_questions(self):
        result = grade_submission(Quiz(id=3, title='Empty', questions=[]), [1, 2])
        assert result.to_dict() == {
            'score': 0, 'total': 0, 'points': 0, 'maxPoints': 0, 'results': []
        }


class TestTakeQuizEndpoints:
    """Test cases for /api/takequiz."""

    def test_quiz_for_taking_hides_correct_answers(self, client, alice_headers, create_quiz):
        created = create_quiz(alice_headers)
        response = client.get(f"/api/takequiz/{created['quizId']}")
        assert response.status_code == 200
        for question in response.get_json()['questions']:
            for option in question['options']:
                assert 'isCorrect' not in option

    def test_quiz_for_taking_unknown(self, client):
        assert client.get('/api/takequiz/999').status_code == 404

    def test_submit_all_correct(self, client, alice_headers, create_quiz):
        created = create_quiz(alice_headers)
        correct = [o['optionId'] for q in created['questions'] for o in q['options'] if o['isCorrect']]

        response = client.post('/api/takequiz/submit', json={
            'quizId': created['quizId'],
            'selectedAnswers': correct,
        })
        assert response.status_code == 200
        data = response.get_json()
        assert (data['score'], data['total']) == (2, 2)
        assert (data['points'], data['maxPoints']) == (3, 3)

    def test_submit_partial(self, client, alice_headers, create_quiz):
        created = create_quiz(alice_headers)
        first, second = created['questions']
        selected = [first['options'][0]['optionId'], second['options'][0]['optionId']]

        response = client.post('/api/takequiz/submit', json={
            'quizId': created['quizId'],
            'selectedAnswers': selected,
        })
        data = response.get_json()
        assert (data['score'], data['total']) == (1, 2)
        assert [r['correct'] for r in data['results']] == [True, False]

    def test_submit_is_anonymous_and_touches_last_used(self, client, alice_headers, create_quiz):
        created = create_quiz(alice_headers)
        response = client.post('/api/takequiz/submit', json={
            'quizId': created['quizId'],
            'selectedAnswers': [],
        })
        assert response.status_code == 200
        fetched = client.get(f"/api/quiz/{created['quizId']}").get_json()
        assert fetched['lastUsedDate'] >= created['lastUsedDate']
        assert fetched['createdDate'] == created['createdDate']

    def test_submit_unknown_quiz(self, client):
        response = client.post('/api/takequiz/submit', json={'quizId': 999, 'selectedAnswers': [1]})
        assert response.status_code == 404

    def test_submit_requires_quiz_id(self, client):
        response = client.post('/api/takequiz/submit', json={'selectedAnswers': [1]})
        assert response.status_code == 400
        assert 'quizId' in response.get_json()['errors']

    def test_submit_rejects_non_integer_answers(self, client, alice_headers, create_quiz):
        created = create_quiz(alice_headers, quiz_payload())
        response = client.post('/api/takequiz/submit', json={
            'quizId': created['quizId'],
            'selectedAnswers': ['1', None],
        })
        assert response.status_code == 400
        assert 'selectedAnswers' in response.get_json()['errors']

    def test_submit_body_must_be_an_object(self, client):
        response = client.post('/api/takequiz/submit', json=[1])
        assert response.status_code == 400
        assert 'body' in response.get_json()['errors']

    def test_submit_with_boolean_quiz_id(self, client):
        response = client.post('/api/takequiz/submit', json={'quizId': True, 'selectedAnswers': []})
        assert response.status_code == 400
        assert 'quizId' in response.get_json()['errors']
