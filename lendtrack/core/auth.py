import logging
from typing import Optional
from itsdangerous import URLSafeTimedSerializer, BadSignature
from lendtrack.configs import SEED

logger = logging.getLogger(__name__)

SERIALIZER = None  # Will be initialized lazily
COOKIE_NAME = "session"
COOKIE_TTL = 604800


def _get_serializer():
    """Get or initialize the SERIALIZER lazily."""
    global SERIALIZER
    if SERIALIZER is None:
        SERIALIZER = URLSafeTimedSerializer(SEED, salt="auth-cookie")
    return SERIALIZER


def create_session_cookie(student: str) -> str:
    """Returns a signed session cookie naming the student."""
    return _get_serializer().dumps({"student": student})


def verify_session_cookie(session) -> Optional[str]:
    """Returns the student named by a valid, unexpired cookie, else None."""
    if not session:
        return None
    try:
        data = _get_serializer().loads(session, max_age=COOKIE_TTL)
    except BadSignature:
        logger.info("Rejected session cookie with a bad or expired signature")
        return None
    student = data.get("student") if isinstance(data, dict) else None
    return student or None


def get_request_student(request) -> Optional[str]:
    """Authenticated student for a request, from the session cookie or
    an `Authorization: Bearer` header.
    """
    session = request.cookies.get(COOKIE_NAME)
    if not session:
        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            session = auth_header.split(" ", 1)[1]
    return verify_session_cookie(session)
