# pkikeys/crypto/oids.py
from __future__ import annotations

# ---- Public key algorithm identifiers ----
RSA_ENCRYPTION = "1.2.840.113549.1.1.1"
EC_PUBLIC_KEY = "1.2.840.10045.2.1"
DSA = "1.2.840.10040.4.1"

# Friendly names for log lines and error messages
ALGORITHM_NAMES = {
    RSA_ENCRYPTION: "RSA",
    EC_PUBLIC_KEY: "EC",
    DSA: "DSA",
}


def algorithm_name(oid: str) -> str:
    return ALGORITHM_NAMES.get(oid, oid)
