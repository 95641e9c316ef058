'''
    Description:
        - Public key decoding: strict DER reader, PEM armor, the RSA public key
          decoder and the algorithm registry that dispatches on the key OID.
        - Consolidates the pieces for easy import across the package.
'''

from .base64url import base64url_encode, base64url_decode
from .key_factory import decode_public_key, read_algorithm, register_public_key_type, supported_algorithms
from .key_format import KeyPkcsFormat
from .oids import RSA_ENCRYPTION
from .pem import pem_decode, pem_encode
from .raw_public_key import PublicKeyInfo, RawPublicKey
from .rsa_public_key import RsaPublicKey, decode_pkcs1, decode_pkcs8

__all__ = [
    "base64url_encode", "base64url_decode",
    "decode_public_key", "read_algorithm", "register_public_key_type", "supported_algorithms",
    "KeyPkcsFormat",
    "RSA_ENCRYPTION",
    "pem_decode", "pem_encode",
    "PublicKeyInfo", "RawPublicKey",
    "RsaPublicKey", "decode_pkcs1", "decode_pkcs8",
]
