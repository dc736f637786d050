import pytest
from django.contrib.auth import get_user_model
from django.db import OperationalError
from rest_framework_simplejwt.tokens import AccessToken

pytestmark = pytest.mark.django_db

User = get_user_model()


def _register(client, **body):
    return client.post('/api/auth/register', body, format='json')


def test_register_returns_public_user(api_client):
    resp = _register(api_client, email='asha@example.com', password='pw-12345', name='Asha')
    assert resp.status_code == 200
    user = resp.json()['user']
    assert user['email'] == 'asha@example.com'
    assert user['name'] == 'Asha'
    assert set(user) == {'id', 'email', 'name'}
    stored = User.objects.get(email='asha@example.com')
    assert stored.password != 'pw-12345'
    assert stored.check_password('pw-12345')


def test_register_without_name(api_client):
    resp = _register(api_client, email='ravi@example.com', password='pw-12345')
    assert resp.status_code == 200
    assert resp.json()['user']['name'] is None


def test_register_duplicate_email(api_client):
    _register(api_client, email='asha@example.com', password='pw-12345')
    resp = _register(api_client, email='asha@example.com', password='other-pw')
    assert resp.status_code == 400
    assert resp.json() == {'error': 'email already registered'}
    assert User.objects.filter(email='asha@example.com').count() == 1


@pytest.mark.parametrize('body', [
    {'email': 'asha@example.com'},
    {'password': 'pw-12345'},
    {'email': '', 'password': ''},
    {},
])
def test_register_requires_email_and_password(api_client, body):
    resp = api_client.post('/api/auth/register', body, format='json')
    assert resp.status_code == 400
    assert resp.json() == {'error': 'email and password required'}


def test_login_issues_eight_hour_token(api_client):
    user = _register(api_client, email='asha@example.com', password='pw-12345').json()['user']
    resp = api_client.post('/api/auth/login', {'email': 'asha@example.com', 'password': 'pw-12345'}, format='json')
    assert resp.status_code == 200
    body = resp.json()
    assert body['user'] == user
    token = AccessToken(body['token'])
    assert str(token['userId']) == str(user['id'])
    assert token['email'] == 'asha@example.com'
    assert token['exp'] - token['iat'] == 8 * 60 * 60


def test_login_failures_look_identical(api_client):
    _register(api_client, email='asha@example.com', password='pw-12345')
    wrong_pw = api_client.post('/api/auth/login', {'email': 'asha@example.com', 'password': 'nope'}, format='json')
    no_user = api_client.post('/api/auth/login', {'email': 'ghost@example.com', 'password': 'nope'}, format='json')
    assert wrong_pw.status_code == no_user.status_code == 401
    assert wrong_pw.json() == no_user.json() == {'error': 'invalid credentials'}


def test_login_requires_both_fields(api_client):
    resp = api_client.post('/api/auth/login', {'email': 'asha@example.com'}, format='json')
    assert resp.status_code == 400
    assert resp.json() == {'error': 'email and password required'}


def test_me_with_token(api_client):
    _register(api_client, email='asha@example.com', password='pw-12345', name='Asha')
    token = api_client.post('/api/auth/login', {'email': 'asha@example.com', 'password': 'pw-12345'},
                            format='json').json()['token']
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    resp = api_client.get('/api/auth/me')
    assert resp.status_code == 200
    assert resp.json()['user']['email'] == 'asha@example.com'


def test_me_without_token(api_client):
    resp = api_client.get('/api/auth/me')
    assert resp.status_code == 401
    assert 'error' in resp.json()


def test_me_with_garbage_token(api_client):
    api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    resp = api_client.get('/api/auth/me')
    assert resp.status_code == 401
    assert set(resp.json()) == {'error'}


def test_database_outage_is_503(api_client, monkeypatch):
    def down(**kwargs):
        raise OperationalError('could not connect to server')

    monkeypatch.setattr('inspections.auth_views.register_user', down)
    resp = _register(api_client, email='asha@example.com', password='pw-12345')
    assert resp.status_code == 503
    assert resp.json() == {'error': 'database unavailable'}
