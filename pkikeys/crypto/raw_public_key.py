from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class PublicKeyInfo:
    """An already-split public key: algorithm OID plus the algorithm-specific key bytes.

    ``encoded_key`` is the content of the SubjectPublicKeyInfo BIT STRING
    (for RSA, the PKCS#1 RSAPublicKey SEQUENCE).
    """
    algorithm: str
    encoded_key: bytes
    parameters: Optional[bytes] = None


class RawPublicKey(ABC):
    """Abstract base class for decoded public keys of any algorithm."""

    def __init__(self, oid: str) -> None:
        self._oid = oid

    @property
    def oid(self) -> str:
        """Algorithm identifier of the key.

        Returns:
            str: Dotted-decimal OID
        """
        return self._oid

    @classmethod
    @abstractmethod
    def from_bytes(cls, raw: bytes, key_format: Any = None) -> "RawPublicKey":
        """Decode a key of this algorithm from raw DER.

        Args:
            raw (bytes): Encoded key
            key_format: Container the key is wrapped in

        Returns:
            RawPublicKey: The decoded key
        """

    @abstractmethod
    def get_asymmetric_key(self) -> Any:
        """Build (once) and return the native key object.

        Returns:
            Any: Key handle usable for verification / encryption
        """

    @abstractmethod
    def close(self) -> None:
        """Release the native key object, if one was built."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
