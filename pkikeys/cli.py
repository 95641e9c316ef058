"""Command line inspector for RSA public key files."""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .crypto.rsa_public_key import RsaPublicKey
from .errors import PublicKeyError
from .log import configure_logging

log = logging.getLogger("pkikeys.cli")

PEM_MARKER = b"-----BEGIN"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Decode an RSA public key (PEM, PKCS#1 DER or PKCS#8 DER) and print its numbers."
    )
    parser.add_argument("keyfile", type=Path, help="Path to the key file")
    parser.add_argument(
        "--format",
        choices=["pem", "pkcs1", "pkcs8"],
        default=None,
        help="Container of the key (default: PEM if armored, otherwise the configured DER format)",
    )
    parser.add_argument("--jwk", action="store_true", help="Print the key as a JWK instead")
    parser.add_argument("--log-level", default=None, help="Override PKIKEYS_LOG_LEVEL")
    return parser.parse_args(argv)


def load_key(data: bytes, key_format: Optional[str] = None) -> RsaPublicKey:
    if key_format == "pem" or (key_format is None and data.lstrip().startswith(PEM_MARKER)):
        return RsaPublicKey.from_pem(data)
    return RsaPublicKey.from_bytes(data, key_format)


def describe(key: RsaPublicKey) -> str:
    lines = [
        f"Algorithm:       RSA ({key.oid})",
        f"Key size:        {key.key_size} bits",
        f"Public exponent: {key.public_exponent_int} (0x{key.public_exponent.hex()})",
        "Modulus:",
    ]
    modulus_hex = key.modulus.hex()
    for i in range(0, len(modulus_hex), 64):
        lines.append("    " + modulus_hex[i:i + 64])
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        data = args.keyfile.read_bytes()
    except OSError as e:
        print(f"ERROR: cannot read {args.keyfile}: {e}", file=sys.stderr)
        return 1

    try:
        with load_key(data, args.format) as key:
            key.get_asymmetric_key()
            output = json.dumps(key.to_jwk(), indent=2) if args.jwk else describe(key)
    except PublicKeyError as e:
        log.debug("decode of %s failed", args.keyfile, exc_info=True)
        print(f"ERROR {e.code}: {e.message}", file=sys.stderr)
        return 1

    print(output)
    return 0
