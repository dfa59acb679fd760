"""PEM key import for the JWE recipient and JWS signing keys.

Supported inputs:

- Private: PKCS#8 (``BEGIN PRIVATE KEY``), PKCS#1 (``BEGIN RSA PRIVATE KEY``)
- Public: SPKI (``BEGIN PUBLIC KEY``), PKCS#1 (``BEGIN RSA PUBLIC KEY``) and
  X.509 certificates (``BEGIN CERTIFICATE``)
"""

from __future__ import annotations

import re
from typing import Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..errors import KeyFormatError

RSAKey = Union[rsa.RSAPrivateKey, rsa.RSAPublicKey]

_PEM_BLOCK_RE = re.compile(
    r"-----BEGIN ([A-Z0-9 ]+)-----.*?-----END \1-----", re.DOTALL
)
_CERT_BLOCK_RE = re.compile(
    r"-----BEGIN CERTIFICATE-----.*?-----END CERTIFICATE-----", re.DOTALL
)

_PRIVATE_LABELS = frozenset({"RSA PRIVATE KEY", "PRIVATE KEY"})
_PUBLIC_LABELS = frozenset({"PUBLIC KEY", "RSA PUBLIC KEY"})


def import_key(pem: str, want_private: bool = False) -> RSAKey:
    """Parse ``pem`` into an RSA key.

    Args:
        pem: PEM text, possibly surrounded by other text or bundled with
            other PEM blocks.
        want_private: Return a private key for signing. When ``False`` a
            public key is returned; a private key PEM is accepted and its
            public half used.

    Raises:
        KeyFormatError: If the PEM is empty, has an unknown label, does not
            parse, or holds something other than the wanted RSA key.
    """
    if not pem or not pem.strip():
        raise KeyFormatError("empty PEM")

    if not want_private and "BEGIN CERTIFICATE" in pem.upper():
        return _certificate_public_key(pem)

    blocks = [(m.group(1), m.group(0)) for m in _PEM_BLOCK_RE.finditer(pem)]
    if not blocks:
        raise KeyFormatError("invalid PEM: no BEGIN/END block found")

    # Bundles (e.g. certificate + private key) use the first usable block.
    usable = _PRIVATE_LABELS if want_private else _PRIVATE_LABELS | _PUBLIC_LABELS
    label, text = next(
        ((label, text) for label, text in blocks if label in usable), blocks[0]
    )
    block = text.encode("ascii", errors="replace")

    if label in _PRIVATE_LABELS:
        key = _load(serialization.load_pem_private_key, block, password=None)
        if not isinstance(key, rsa.RSAPrivateKey):
            raise KeyFormatError(f"{label} block does not hold an RSA key")
        return key if want_private else key.public_key()

    if label in _PUBLIC_LABELS:
        if want_private:
            raise KeyFormatError(f"expected a private key PEM, got {label}")
        key = _load(serialization.load_pem_public_key, block)
        if not isinstance(key, rsa.RSAPublicKey):
            raise KeyFormatError(f"{label} block does not hold an RSA key")
        return key

    raise KeyFormatError(f"unsupported PEM label: {label}")


def _certificate_public_key(pem: str) -> rsa.RSAPublicKey:
    match = _CERT_BLOCK_RE.search(pem)
    if match is None:
        raise KeyFormatError("invalid PEM: no CERTIFICATE block found")
    block = match.group(0).encode("ascii", errors="replace")
    cert = _load(x509.load_pem_x509_certificate, block)
    key = cert.public_key()
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyFormatError("certificate has no RSA public key")
    return key


def _load(loader, data: bytes, **kwargs):
    try:
        return loader(data, **kwargs)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"invalid PEM: {exc}") from exc
