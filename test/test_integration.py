"""
Integration test cases for complete user flows.
"""
from conftest import bearer, quiz_payload


class TestAuthFlow:
    """Test complete authentication flow."""

    def test_register_then_login_flow(self, client):
        register_response = client.post('/api/account/register', json={
            'username': 'flowuser',
            'email': 'flow@test.com',
            'password': 'Password123',
        })
        assert register_response.status_code == 200

        login_response = client.post('/api/account/login', json={
            'email': 'flow@test.com',
            'password': 'Password123',
        })
        assert login_response.status_code == 200
        assert login_response.get_json()['userId'] == register_response.get_json()['userId']

        me = client.get('/api/account/me', headers=bearer(login_response.get_json()['token']))
        assert me.get_json()['username'] == 'flowuser'


class TestQuizFlow:
    """Test building, sharing and taking a quiz."""

    def test_build_share_take_copy_delete(self, client, register):
        author = bearer(register('author')['token'])
        player = bearer(register('player')['token'])

        quiz = client.post('/api/quiz', json=quiz_payload(public=True), headers=author).get_json()

        # Anyone can find and take it
        public = client.get('/api/quiz/public').get_json()
        assert quiz['quizId'] in [q['quizId'] for q in public]

        taking = client.get(f"/api/takequiz/{quiz['quizId']}").get_json()
        first_option = taking['questions'][0]['options'][0]['optionId']
        result = client.post('/api/takequiz/submit', json={
            'quizId': quiz['quizId'],
            'selectedAnswers': [first_option],
        }).get_json()
        assert (result['score'], result['total']) == (1, 2)

        # The player copies it, edits the copy, and the original stays as it was
        copy = client.post(f"/api/quiz/{quiz['quizId']}/duplicate", headers=player).get_json()
        copy['title'] = 'My capitals'
        response = client.put(f"/api/quiz/{copy['quizId']}", json=copy, headers=player)
        assert response.status_code == 200
        assert client.get(f"/api/quiz/{quiz['quizId']}").get_json()['title'] == 'Capitals'

        # Only the author may delete the original
        assert client.delete(f"/api/quiz/{quiz['quizId']}", headers=player).status_code == 403
        assert client.delete(f"/api/quiz/{quiz['quizId']}", headers=author).status_code == 204
        assert client.get(f"/api/quiz/{copy['quizId']}").status_code == 200


class TestApplication:
    """Test application-wide behaviour."""

    def test_index(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert response.get_json()['status'] == 'ok'

    def test_unknown_route_returns_json(self, client):
        response = client.get('/api/does-not-exist')
        assert response.status_code == 404
        assert response.is_json

    def test_wrong_method_returns_json(self, client):
        response = client.patch('/api/account/login')
        assert response.status_code == 405
        assert response.is_json

    def test_security_headers(self, client):
        response = client.get('/')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'
        assert 'Content-Security-Policy' in response.headers
