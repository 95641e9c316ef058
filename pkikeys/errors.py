# pkikeys/errors.py
from __future__ import annotations
from typing import Any, Dict

# ---- Error codes ----
ERR_PUBLIC_KEY = "PUBLIC_KEY_ERROR"
ERR_NULL_OR_EMPTY_INPUT = "NULL_OR_EMPTY_INPUT"
ERR_MALFORMED_ENCODING = "MALFORMED_ENCODING"
ERR_UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
ERR_ALGORITHM_MISMATCH = "ALGORITHM_MISMATCH"
ERR_INVALID_KEY_FORMAT = "INVALID_KEY_FORMAT"
ERR_INVALID_KEY = "INVALID_KEY"
ERR_KEY_RELEASED = "KEY_RELEASED"


class PublicKeyError(Exception):
    """Base class for every public key decoding failure.

    Callers branch on the exception type or on ``code``; the message is for humans.
    """
    code = ERR_PUBLIC_KEY

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class NullOrEmptyInputError(PublicKeyError, ValueError):
    code = ERR_NULL_OR_EMPTY_INPUT


class MalformedEncodingError(PublicKeyError, ValueError):
    code = ERR_MALFORMED_ENCODING


class UnsupportedAlgorithmError(PublicKeyError, ValueError):
    code = ERR_UNSUPPORTED_ALGORITHM


class AlgorithmMismatchError(UnsupportedAlgorithmError):
    code = ERR_ALGORITHM_MISMATCH


class InvalidKeyFormatError(PublicKeyError, ValueError):
    code = ERR_INVALID_KEY_FORMAT


class InvalidKeyError(PublicKeyError, ValueError):
    # numbers decoded fine but the crypto backend refuses them as an RSA key
    code = ERR_INVALID_KEY


class KeyReleasedError(PublicKeyError, RuntimeError):
    code = ERR_KEY_RELEASED
