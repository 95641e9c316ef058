'''
    Description:
        - RSA public key decoder. Takes a DER-encoded key in PKCS#1 (RSAPublicKey)
          or PKCS#8 (SubjectPublicKeyInfo) form and keeps the canonical modulus
          and public exponent bytes.
        - Builds a cryptography RSAPublicKey from those bytes on first request
          and hands back the same object afterwards.
'''

# ========== Imports ==========
from __future__ import annotations
import logging
import threading
from typing import Callable, Dict, Optional, Tuple, Union

from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

from ..config import settings
from ..errors import (
    AlgorithmMismatchError,
    InvalidKeyError,
    KeyReleasedError,
    MalformedEncodingError,
    NullOrEmptyInputError,
    PublicKeyError,
    UnsupportedAlgorithmError,
)
from . import der
from .base64url import base64url_encode
from .key_format import KeyPkcsFormat
from .oids import RSA_ENCRYPTION, algorithm_name
from .pem import PEM_PUBLIC_KEY, PEM_RSA_PUBLIC_KEY, pem_decode, pem_encode
from .raw_public_key import PublicKeyInfo, RawPublicKey

log = logging.getLogger("pkikeys.crypto.rsa_public_key")

KeyFormatArg = Union[KeyPkcsFormat, str]

_PEM_LABELS = {
    KeyPkcsFormat.PKCS1: PEM_RSA_PUBLIC_KEY,
    KeyPkcsFormat.PKCS8: PEM_PUBLIC_KEY,
}


# ========== Input checks ==========
def require_key_bytes(raw, what: str) -> bytes:
    if raw is None:
        raise NullOrEmptyInputError(f"{what} is missing")
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes-like, not {type(raw).__name__}")
    if len(raw) == 0:
        raise NullOrEmptyInputError(f"{what} is empty")
    if len(raw) > settings.max_input_bytes:
        raise MalformedEncodingError(
            f"{what} is {len(raw)} bytes, more than the {settings.max_input_bytes} byte limit"
        )
    return bytes(raw)


def _non_negative(payload: bytes, field: str) -> bytes:
    if payload[0] & 0x80:
        raise MalformedEncodingError(f"{field} is negative")
    return payload


# ========== PKCS#1 ==========
def decode_pkcs1(raw: bytes) -> Tuple[bytes, bytes]:
    """RSAPublicKey ::= SEQUENCE { modulus INTEGER, publicExponent INTEGER }

    Returns (modulus, public_exponent). The sign pad in front of the modulus is
    dropped; the exponent is returned exactly as encoded.
    """
    reader = der.DerReader(raw)
    reader.enter(der.SEQUENCE)

    raw_modulus = _non_negative(der.check_integer(reader.expect_tag(der.INTEGER)), "modulus")
    if raw_modulus[0] == 0 and len(raw_modulus) > 1:
        modulus = raw_modulus[1:]
    else:
        modulus = raw_modulus

    public_exponent = _non_negative(der.check_integer(reader.expect_tag(der.INTEGER)), "public exponent")

    reader.expect_end()
    reader.leave()
    reader.expect_end()
    return modulus, public_exponent


# ========== PKCS#8 / SubjectPublicKeyInfo ==========
def decode_pkcs8(raw: bytes) -> Tuple[bytes, bytes]:
    """SEQUENCE { SEQUENCE { algorithm OID, parameters }, subjectPublicKey BIT STRING }"""
    reader = der.DerReader(raw)
    reader.enter(der.SEQUENCE)
    start = reader.offset

    # peek at the algorithm first, then come back for the key itself
    reader.enter(der.SEQUENCE)
    oid = der.decode_oid(reader.expect_tag(der.OBJECT_IDENTIFIER))
    if oid != RSA_ENCRYPTION:
        raise UnsupportedAlgorithmError(
            f"public key algorithm is {algorithm_name(oid)} ({oid}), not RSA"
        )

    reader.seek(start)
    reader.expect_tag(der.SEQUENCE)
    key_octets = der.bit_string_octets(reader.expect_tag(der.BIT_STRING))
    reader.expect_end()
    reader.leave()
    reader.expect_end()

    return decode_pkcs1(key_octets)


_DECODERS: Dict[KeyPkcsFormat, Callable[[bytes], Tuple[bytes, bytes]]] = {
    KeyPkcsFormat.PKCS1: decode_pkcs1,
    KeyPkcsFormat.PKCS8: decode_pkcs8,
}


# ========== Decoded key ==========
class RsaPublicKey(RawPublicKey):
    """Canonical RSA public key plus a lazily built cryptography key handle."""

    def __init__(self, modulus: bytes, public_exponent: bytes) -> None:
        super().__init__(RSA_ENCRYPTION)
        if not modulus or not public_exponent:
            raise NullOrEmptyInputError("modulus and public exponent are required")
        self._modulus = bytes(modulus)
        self._public_exponent = bytes(public_exponent)
        self._key: Optional[RSAPublicKey] = None
        self._closed = False
        self._lock = threading.Lock()

    # ---- constructors ----

    @classmethod
    def from_public_key_info(cls, info: Optional[PublicKeyInfo]) -> "RsaPublicKey":
        """Decode the PKCS#1 key carried by an (algorithm, key bytes) pair."""
        if info is None:
            raise NullOrEmptyInputError("public key info is missing")
        raw = require_key_bytes(info.encoded_key, "encoded key")
        if info.algorithm != RSA_ENCRYPTION:
            raise AlgorithmMismatchError(
                f"public key algorithm is {algorithm_name(info.algorithm)} ({info.algorithm}), not RSA"
            )
        return cls._decode(raw, KeyPkcsFormat.PKCS1)

    @classmethod
    def from_bytes(cls, raw: bytes, key_format: Optional[KeyFormatArg] = None) -> "RsaPublicKey":
        """Decode raw DER in the given container (settings.default_key_format when omitted)."""
        raw = require_key_bytes(raw, "raw key data")
        fmt = KeyPkcsFormat.parse(settings.default_key_format if key_format is None else key_format)
        return cls._decode(raw, fmt)

    @classmethod
    def from_pem(cls, text: Union[str, bytes]) -> "RsaPublicKey":
        if text is None or len(text) == 0:
            raise NullOrEmptyInputError("PEM data is empty")
        label, raw = pem_decode(text)
        for fmt, fmt_label in _PEM_LABELS.items():
            if label == fmt_label:
                return cls._decode(require_key_bytes(raw, "PEM payload"), fmt)
        raise UnsupportedAlgorithmError(f"PEM block {label!r} is not an RSA public key")

    @classmethod
    def from_numbers(cls, modulus: int, public_exponent: int) -> "RsaPublicKey":
        if modulus <= 0 or public_exponent <= 0:
            raise InvalidKeyError("modulus and public exponent must be positive")
        return cls(
            modulus.to_bytes((modulus.bit_length() + 7) // 8, "big"),
            public_exponent.to_bytes((public_exponent.bit_length() + 7) // 8, "big"),
        )

    @classmethod
    def _decode(cls, raw: bytes, fmt: KeyPkcsFormat) -> "RsaPublicKey":
        try:
            modulus, public_exponent = _DECODERS[fmt](raw)
        except PublicKeyError as e:
            log.debug("rejected %s public key (%d bytes): %s %s", fmt.value, len(raw), e.code, e.message)
            raise
        key = cls(modulus, public_exponent)
        log.debug("decoded %s RSA public key, %d-bit modulus", fmt.value, key.key_size)
        return key

    # ---- canonical fields ----

    @property
    def modulus(self) -> bytes:
        return self._modulus

    @property
    def public_exponent(self) -> bytes:
        return self._public_exponent

    @property
    def modulus_int(self) -> int:
        return int.from_bytes(self._modulus, "big")

    @property
    def public_exponent_int(self) -> int:
        return int.from_bytes(self._public_exponent, "big")

    @property
    def key_size(self) -> int:
        return self.modulus_int.bit_length()

    @property
    def closed(self) -> bool:
        return self._closed

    # ---- key handle ----

    def get_asymmetric_key(self) -> RSAPublicKey:
        key = self._key
        if key is not None:
            return key
        with self._lock:
            if self._closed:
                raise KeyReleasedError("RSA public key has been closed")
            if self._key is None:
                self._key = self._build_key()
            return self._key

    def _build_key(self) -> RSAPublicKey:
        numbers = rsa.RSAPublicNumbers(self.public_exponent_int, self.modulus_int)
        try:
            key = numbers.public_key()
        except ValueError as e:
            raise InvalidKeyError(f"cannot build RSA key from decoded numbers: {e}") from e
        log.debug("built RSA key handle (%d bits)", key.key_size)
        return key

    def close(self) -> None:
        with self._lock:
            self._key = None
            self._closed = True

    # ---- re-encoding ----

    def encode(self, key_format: KeyFormatArg = KeyPkcsFormat.PKCS8) -> bytes:
        fmt = KeyPkcsFormat.parse(key_format)
        pkcs1 = der.encode_sequence(
            der.encode_unsigned_integer(self._modulus),
            der.encode_unsigned_integer(self._public_exponent),
        )
        if fmt is KeyPkcsFormat.PKCS1:
            return pkcs1
        algorithm = der.encode_sequence(der.encode_oid(RSA_ENCRYPTION), der.encode_null())
        return der.encode_sequence(algorithm, der.encode_bit_string(pkcs1))

    def to_pem(self, key_format: KeyFormatArg = KeyPkcsFormat.PKCS8) -> str:
        fmt = KeyPkcsFormat.parse(key_format)
        return pem_encode(_PEM_LABELS[fmt], self.encode(fmt))

    def to_public_key_info(self) -> PublicKeyInfo:
        return PublicKeyInfo(self.oid, self.encode(KeyPkcsFormat.PKCS1), der.encode_null())

    def to_jwk(self) -> Dict[str, str]:
        # JWK wants the minimal big-endian octets for both members
        return {
            "kty": "RSA",
            "n": base64url_encode(self._modulus.lstrip(b"\x00") or b"\x00"),
            "e": base64url_encode(self._public_exponent.lstrip(b"\x00") or b"\x00"),
        }

    # ---- dunder ----

    def __eq__(self, other) -> bool:
        if not isinstance(other, RsaPublicKey):
            return NotImplemented
        return (self.oid, self._modulus, self._public_exponent) == (
            other.oid, other._modulus, other._public_exponent,
        )

    def __hash__(self) -> int:
        return hash((self.oid, self._modulus, self._public_exponent))

    def __repr__(self) -> str:
        return f"RsaPublicKey(key_size={self.key_size}, public_exponent={self.public_exponent_int})"
