# pkikeys/crypto/key_factory.py
"""
Key factory
-----------
Looks at the algorithm OID of a SubjectPublicKeyInfo and hands the bytes to
the RawPublicKey variant registered for it. Only RSA is registered here;
other algorithms can be plugged in with register_public_key_type().
"""

from __future__ import annotations
import logging
from typing import Dict, Type

from ..errors import MalformedEncodingError, UnsupportedAlgorithmError
from . import der
from .key_format import KeyPkcsFormat
from .oids import RSA_ENCRYPTION, algorithm_name
from .raw_public_key import RawPublicKey
from .rsa_public_key import RsaPublicKey, require_key_bytes

log = logging.getLogger("pkikeys.crypto.key_factory")

_PUBLIC_KEY_TYPES: Dict[str, Type[RawPublicKey]] = {
    RSA_ENCRYPTION: RsaPublicKey,
}


def register_public_key_type(oid: str, key_type: Type[RawPublicKey]) -> None:
    """Map an algorithm OID to the RawPublicKey subclass that decodes it."""
    try:
        der.encode_oid(oid)
    except ValueError as e:
        raise MalformedEncodingError(f"invalid algorithm OID {oid!r}") from e
    _PUBLIC_KEY_TYPES[oid] = key_type


def supported_algorithms() -> Dict[str, Type[RawPublicKey]]:
    return dict(_PUBLIC_KEY_TYPES)


def read_algorithm(raw: bytes) -> str:
    """Return the algorithm OID of a SubjectPublicKeyInfo without decoding the key."""
    reader = der.DerReader(require_key_bytes(raw, "public key info"))
    reader.enter(der.SEQUENCE)
    reader.enter(der.SEQUENCE)
    return der.decode_oid(reader.expect_tag(der.OBJECT_IDENTIFIER))


def decode_public_key(raw: bytes) -> RawPublicKey:
    """Decode a SubjectPublicKeyInfo into the matching RawPublicKey variant."""
    oid = read_algorithm(raw)
    key_type = _PUBLIC_KEY_TYPES.get(oid)
    if key_type is None:
        log.debug("no decoder registered for %s (%s)", algorithm_name(oid), oid)
        raise UnsupportedAlgorithmError(
            f"public key algorithm {algorithm_name(oid)} ({oid}) is not supported"
        )
    return key_type.from_bytes(raw, KeyPkcsFormat.PKCS8)
