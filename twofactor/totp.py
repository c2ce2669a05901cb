"""
TOTP (Time-based One-Time Password) time steps following RFC 6238.

A TOTP code is the HOTP code of ``floor(unix_time / window_size)``::

    step = get_current_time_step()
    code = calculate_verification_code(secret, step)

Wall-clock reads go through a :data:`Clock` so tests can pin the time.
"""

import time
from typing import Callable, Optional

from twofactor.errors import InvalidTimeStepError
from twofactor.utils import DEFAULT_WINDOW_SIZE, validate_window_size

Clock = Callable[[], float]
"""Zero-argument callable returning Unix time in seconds."""


def time_step_at(timestamp: float, window_size: int = DEFAULT_WINDOW_SIZE) -> int:
    """
    Return the time step containing ``timestamp``.

    Args:
        timestamp:   Unix time in seconds.
        window_size: Time step length in seconds (default 30).

    Returns:
        ``floor(timestamp / window_size)``.

    Raises:
        InvalidWindowSizeError: If ``window_size`` is less than 1.
        InvalidTimeStepError:   If ``timestamp`` is negative.
    """
    validate_window_size(window_size)
    if timestamp < 0:
        raise InvalidTimeStepError(f"Timestamp must not be negative, got {timestamp!r}")
    return int(timestamp) // window_size


def get_current_time_step(
    window_size: int = DEFAULT_WINDOW_SIZE,
    clock: Optional[Clock] = None,
) -> int:
    """
    Return the time step for the current time.

    Args:
        window_size: Time step length in seconds (default 30).
        clock:       Time source (uses time.time() if None).
    """
    validate_window_size(window_size)
    now = (clock or time.time)()
    return time_step_at(now, window_size)


def remaining_seconds(
    window_size: int = DEFAULT_WINDOW_SIZE,
    clock: Optional[Clock] = None,
) -> int:
    """Return seconds until the current TOTP window expires."""
    validate_window_size(window_size)
    now = (clock or time.time)()
    return window_size - (int(now) % window_size)
