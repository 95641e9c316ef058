# pkikeys/__init__.py
from .crypto import KeyPkcsFormat, PublicKeyInfo, RawPublicKey, RsaPublicKey, decode_public_key
from .errors import (
    AlgorithmMismatchError,
    InvalidKeyError,
    InvalidKeyFormatError,
    KeyReleasedError,
    MalformedEncodingError,
    NullOrEmptyInputError,
    PublicKeyError,
    UnsupportedAlgorithmError,
)

__version__ = "0.1.0"

__all__ = [
    "KeyPkcsFormat", "PublicKeyInfo", "RawPublicKey", "RsaPublicKey", "decode_public_key",
    "PublicKeyError", "NullOrEmptyInputError", "MalformedEncodingError",
    "UnsupportedAlgorithmError", "AlgorithmMismatchError", "InvalidKeyFormatError",
    "InvalidKeyError", "KeyReleasedError",
]
