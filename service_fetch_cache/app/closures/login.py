"""
Login attempt tracker with a private failure count.
"""

import hmac
from typing import Callable

from shared.errors import ValidationError
from shared.logging import get_logger

from .models import LoginOutcome, LoginStatus

DEFAULT_PASSWORD = "secret123"
DEFAULT_MAX_ATTEMPTS = 3

logger = get_logger("fetch_cache.login_tracker")


def make_login_tracker(
    password: str = DEFAULT_PASSWORD,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Callable[[str], LoginOutcome]:
    """Build a login check that locks after ``max_attempts`` wrong passwords.

    The failure count is only reachable through the returned function. The
    lock check runs before the password check, so once locked even the right
    password is refused. A successful login does not reset the count.
    """
    if max_attempts < 1:
        raise ValidationError("max_attempts must be at least 1", {"max_attempts": max_attempts})

    attempts = 0

    def login(candidate: str) -> LoginOutcome:
        nonlocal attempts
        if attempts >= max_attempts:
            logger.warning("Login refused, account locked", max_attempts=max_attempts)
            return LoginOutcome(LoginStatus.LOCKED, remaining_attempts=0)

        if hmac.compare_digest(candidate.encode(), password.encode()):
            return LoginOutcome(LoginStatus.SUCCESS, remaining_attempts=max_attempts - attempts)

        attempts += 1
        logger.info("Wrong password", attempts=attempts, max_attempts=max_attempts)
        return LoginOutcome(LoginStatus.FAILURE, remaining_attempts=max_attempts - attempts)

    return login
