'''
    Description:
        - Read-only view of an Enterprise Certification Authority (Enrollment
          Server) entry, built from an attribute bag a directory client already
          fetched. No directory connectivity lives here.
        - The CA certificate's public key can be handed straight to the RSA
          public key decoder.
'''

# ========== Imports ==========
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Mapping, Optional, Tuple

from cryptography import x509
from cryptography.hazmat.primitives import serialization

from ..crypto.key_format import KeyPkcsFormat
from ..crypto.rsa_public_key import RsaPublicKey
from ..errors import MalformedEncodingError

log = logging.getLogger("pkikeys.directory.enroll_server")


# ========== Flags ==========
class EnrollServerFlag(IntFlag):
    NONE = 0
    NO_TEMPLATE_SUPPORT = 0x1
    CA_SERVERTYPE_ADVANCED = 0x2


# ========== Attribute helpers ==========
def _single(attrs: Mapping[str, Any], name: str) -> Any:
    # directory clients hand back single-valued attributes as one-element lists
    value = attrs.get(name)
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _text(attrs: Mapping[str, Any], name: str) -> Optional[str]:
    value = _single(attrs, name)
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


# ========== Entry ==========
@dataclass(frozen=True)
class EnrollServerEntry:
    distinguished_name: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    computer_name: Optional[str] = None
    certificate_templates: Tuple[str, ...] = ()
    certificate: Optional[x509.Certificate] = field(default=None, compare=False)
    flags: EnrollServerFlag = EnrollServerFlag.NONE

    @classmethod
    def from_attributes(cls, attrs: Mapping[str, Any]) -> "EnrollServerEntry":
        templates = attrs.get("certificateTemplates") or ()
        if isinstance(templates, (str, bytes)):
            templates = (templates,)

        cert = None
        cert_bytes = _single(attrs, "cACertificate")
        if cert_bytes is not None and len(cert_bytes) > 1:
            try:
                cert = x509.load_der_x509_certificate(bytes(cert_bytes))
            except ValueError as e:
                raise MalformedEncodingError(f"cACertificate is not a DER certificate: {e}") from e

        raw_flags = _single(attrs, "flags")
        if raw_flags in (None, "", b""):
            flags = EnrollServerFlag.NONE
        else:
            try:
                value = int(raw_flags)
            except (TypeError, ValueError) as e:
                raise MalformedEncodingError(f"flags attribute {raw_flags!r} is not an integer") from e
            # the directory stores flags as a signed 32-bit integer
            flags = EnrollServerFlag(value & 0xFFFFFFFF)

        entry = cls(
            distinguished_name=_text(attrs, "distinguishedName"),
            name=_text(attrs, "cn"),
            display_name=_text(attrs, "displayName"),
            computer_name=_text(attrs, "dNSHostName"),
            certificate_templates=tuple(
                t.decode("utf-8") if isinstance(t, (bytes, bytearray)) else str(t) for t in templates
            ),
            certificate=cert,
            flags=flags,
        )
        log.debug("mapped enrollment server %r (%d templates)", entry.name, len(entry.certificate_templates))
        return entry

    def supports_template(self, template_name: str) -> bool:
        return template_name in self.certificate_templates

    def ca_public_key(self) -> Optional[RsaPublicKey]:
        """CA certificate key as an RsaPublicKey, or None when the entry carries no certificate."""
        if self.certificate is None:
            return None
        spki = self.certificate.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        return RsaPublicKey.from_bytes(spki, KeyPkcsFormat.PKCS8)
