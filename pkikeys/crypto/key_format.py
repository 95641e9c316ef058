# pkikeys/crypto/key_format.py
from __future__ import annotations
from enum import Enum
from typing import Union

from ..errors import InvalidKeyFormatError


class KeyPkcsFormat(Enum):
    """Container a raw public key is wrapped in."""
    PKCS1 = "pkcs1"   # bare RSAPublicKey SEQUENCE
    PKCS8 = "pkcs8"   # SubjectPublicKeyInfo envelope

    @classmethod
    def parse(cls, value: Union["KeyPkcsFormat", str]) -> "KeyPkcsFormat":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidKeyFormatError(f"unknown key format {value!r}, expected one of: pkcs1, pkcs8")
