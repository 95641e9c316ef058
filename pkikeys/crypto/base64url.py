'''
    BASE64URL functionality (RFC 7515 style, no padding)

    Used for the JWK "n" / "e" members of exported RSA keys.
'''

# ========== Imports ==========
import base64
import binascii

from ..errors import MalformedEncodingError

# ========== Base64 URL Encoding ==========
def base64url_encode(raw: bytes) -> str:
    encoded = base64.urlsafe_b64encode(raw).decode("ascii")
    return encoded.rstrip("=")


# ========== Base64 URL Decoding ==========
def base64url_decode(text: str) -> bytes:
    missing = (-len(text)) % 4    # how many chars needed to reach multiple of 4
    if missing == 3:
        raise MalformedEncodingError(f"invalid base64url length {len(text)}")
    try:
        return base64.urlsafe_b64decode(text + "=" * missing)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncodingError(f"invalid base64url data: {e}") from e
