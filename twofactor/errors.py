"""
Exception hierarchy for twofactor.

Configuration errors also derive from :class:`ValueError` so callers that
already catch ``ValueError`` keep working.
"""


class TwoFactorError(Exception):
    """Base class for every error raised by twofactor."""


class EntropySourceError(TwoFactorError, RuntimeError):
    """The secure random number generator is unavailable or failed."""


class UnsupportedAlgorithmError(TwoFactorError, ValueError):
    """The requested HMAC algorithm is unknown or refused by the backend."""


class InvalidKeyError(TwoFactorError, ValueError):
    """The shared secret is empty, of the wrong type, or cannot be decoded."""


class InvalidDigitCountError(TwoFactorError, ValueError):
    """The requested number of OTP digits is out of range."""


class InvalidWindowSizeError(TwoFactorError, ValueError):
    """The TOTP window size is not a positive number of seconds."""


class InvalidTimeStepError(TwoFactorError, ValueError):
    """The counter / time step does not fit an unsigned 64-bit integer."""
