import pytest
from types import SimpleNamespace
from unittest.mock import patch

from itsdangerous import URLSafeTimedSerializer
from lendtrack.core import auth


@pytest.fixture(autouse=True)
def serializer():
    auth.SERIALIZER = URLSafeTimedSerializer(b"123", salt="auth-cookie")
    yield auth.SERIALIZER
    auth.SERIALIZER = None

def test_cookie_round_trip():
    cookie = auth.create_session_cookie("alice")
    assert auth.verify_session_cookie(cookie) == "alice"

def test_missing_cookie():
    assert auth.verify_session_cookie(None) is None
    assert auth.verify_session_cookie("") is None

def test_tampered_cookie_is_rejected():
    cookie = auth.create_session_cookie("alice")
    assert auth.verify_session_cookie(cookie[:-2] + "xx") is None

def test_cookie_signed_with_another_key_is_rejected():
    forged = URLSafeTimedSerializer(b"456", salt="auth-cookie").dumps({"student": "alice"})
    assert auth.verify_session_cookie(forged) is None

def test_expired_cookie_is_rejected():
    cookie = auth.create_session_cookie("alice")
    with patch.object(auth, "COOKIE_TTL", -1):
        assert auth.verify_session_cookie(cookie) is None

def test_request_student_from_cookie_or_bearer():
    cookie = auth.create_session_cookie("bob")
    from_cookie = SimpleNamespace(cookies={"session": cookie}, headers={})
    from_header = SimpleNamespace(cookies={}, headers={"Authorization": f"Bearer {cookie}"})
    anonymous = SimpleNamespace(cookies={}, headers={})
    assert auth.get_request_student(from_cookie) == "bob"
    assert auth.get_request_student(from_header) == "bob"
    assert auth.get_request_student(anonymous) is None
