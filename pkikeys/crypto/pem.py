'''
    Description:
        - PEM armor for public keys: "PUBLIC KEY" wraps a SubjectPublicKeyInfo
          (PKCS#8 container), "RSA PUBLIC KEY" wraps a bare PKCS#1 RSAPublicKey.
'''

# ========== Imports ==========
from __future__ import annotations
import base64
import binascii
import re
from typing import Tuple, Union

from ..errors import MalformedEncodingError

PEM_PUBLIC_KEY = "PUBLIC KEY"
PEM_RSA_PUBLIC_KEY = "RSA PUBLIC KEY"

_PEM_BLOCK = re.compile(
    r"-----BEGIN ([A-Z0-9 ]+)-----(.*?)-----END \1-----",
    re.DOTALL,
)


# ========== PEM Decoding ==========
def pem_decode(text: Union[str, bytes]) -> Tuple[str, bytes]:
    ''' Return (label, der) for the first PEM block in text. '''
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("ascii")
        except UnicodeDecodeError as e:
            raise MalformedEncodingError("PEM data is not ASCII") from e

    match = _PEM_BLOCK.search(text)
    if match is None:
        raise MalformedEncodingError("no PEM block found")
    label = match.group(1)
    body = "".join(match.group(2).split())
    try:
        der = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncodingError(f"PEM block {label!r} has invalid base64: {e}") from e
    if not der:
        raise MalformedEncodingError(f"PEM block {label!r} is empty")
    return label, der


# ========== PEM Encoding ==========
def pem_encode(label: str, der: bytes) -> str:
    body = base64.b64encode(der).decode("ascii")
    lines = [body[i:i + 64] for i in range(0, len(body), 64)]
    return "\n".join([f"-----BEGIN {label}-----", *lines, f"-----END {label}-----", ""])
