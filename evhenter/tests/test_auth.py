"""Tests for bearer token authentication."""

from datetime import datetime, timedelta, timezone

import jwt

from evhenter.api.auth import extract_bearer_token, sign_token, verify_token
from evhenter.config.auth import AuthConfig
from evhenter.models import User

CONFIG = AuthConfig(token_secret='test-secret-that-is-long-enough-for-hs256')

def test_extract_bearer_token():
    assert extract_bearer_token('Bearer abc.def') == 'abc.def'
    assert extract_bearer_token(None) is None
    assert extract_bearer_token('') is None
    assert extract_bearer_token('Basic abc') is None
    assert extract_bearer_token('Bearer') is None
    assert extract_bearer_token('Bearer a b') is None

def test_sign_and_verify():
    token = sign_token('user-1', CONFIG)
    assert verify_token(token, CONFIG) == 'user-1'

def test_token_claims_match_account_service():
    token = sign_token('user-1', CONFIG, email='kari@example.no')
    claims = jwt.decode(
        token, CONFIG.token_secret, algorithms=['HS256'],
        issuer='evhenter.ai', audience='evhenter.ai'
    )

    assert claims['userId'] == 'user-1'
    assert claims['email'] == 'kari@example.no'
    assert claims['role'] == 'user'
    assert claims['exp'] - claims['iat'] == 7 * 24 * 3600

def test_verify_accepts_externally_issued_token():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {'userId': 'user-9', 'email': 'ola@example.no', 'role': 'admin',
         'iat': now, 'exp': now + timedelta(days=7), 'iss': 'evhenter.ai', 'aud': 'evhenter.ai'},
        CONFIG.token_secret,
        algorithm='HS256'
    )
    assert verify_token(token, CONFIG) == 'user-9'

def test_verify_rejects_wrong_secret():
    token = sign_token('user-1', CONFIG)
    other = AuthConfig(token_secret='another-secret-that-is-long-enough-for-hs256')
    assert verify_token(token, other) is None

def test_verify_rejects_expired_token():
    token = sign_token('user-1', CONFIG, expires_in=timedelta(seconds=-10))
    assert verify_token(token, CONFIG) is None

def test_verify_rejects_wrong_issuer_or_audience():
    now = datetime.now(timezone.utc)
    base = {'userId': 'user-1', 'exp': now + timedelta(hours=1)}
    wrong_issuer = jwt.encode({**base, 'iss': 'example.com', 'aud': 'evhenter.ai'}, CONFIG.token_secret)
    wrong_audience = jwt.encode({**base, 'iss': 'evhenter.ai', 'aud': 'example.com'}, CONFIG.token_secret)

    assert verify_token(wrong_issuer, CONFIG) is None
    assert verify_token(wrong_audience, CONFIG) is None

def test_verify_rejects_missing_claims():
    now = datetime.now(timezone.utc)
    no_user = jwt.encode(
        {'exp': now + timedelta(hours=1), 'iss': 'evhenter.ai', 'aud': 'evhenter.ai'},
        CONFIG.token_secret
    )
    no_expiry = jwt.encode(
        {'userId': 'user-1', 'iss': 'evhenter.ai', 'aud': 'evhenter.ai'},
        CONFIG.token_secret
    )

    assert verify_token(no_user, CONFIG) is None
    assert verify_token(no_expiry, CONFIG) is None

def test_verify_rejects_garbage():
    assert verify_token('not-a-jwt', CONFIG) is None
    assert verify_token('user-1.deadbeef', CONFIG) is None

def test_me(client, auth_headers, user):
    response = client.get("/api/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()['data'] == {
        'id': user,
        'email': 'kari@example.no',
        'name': 'Kari Nordmann',
        'role': 'user',
    }

def test_me_without_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {
        'error': 'Unauthorized',
        'message': 'No authentication token provided',
    }

def test_me_with_bad_signature(client, user):
    forged = sign_token(user, AuthConfig(token_secret='forged-secret-that-is-long-enough-for-hs256'))

    response = client.get("/api/auth/me", headers={'Authorization': f'Bearer {forged}'})

    assert response.status_code == 401
    assert response.json()['message'] == 'Invalid or expired token'

def test_me_with_expired_token(client, user):
    expired = sign_token(user, AuthConfig(), expires_in=timedelta(minutes=-1))

    response = client.get("/api/auth/me", headers={'Authorization': f'Bearer {expired}'})

    assert response.status_code == 401
    assert response.json() == {'error': 'Unauthorized', 'message': 'Invalid or expired token'}

def test_me_with_unknown_user(client):
    token = sign_token('missing-user', AuthConfig())

    response = client.get("/api/auth/me", headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 401

def test_me_with_inactive_account(client, database, user, auth_headers):
    with database.session() as session:
        session.get(User, user).is_active = False

    response = client.get("/api/auth/me", headers=auth_headers)

    assert response.status_code == 403
    assert response.json() == {'error': 'Forbidden', 'message': 'User account is inactive'}
