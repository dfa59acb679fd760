"""JWS signing of a SHA-256 digest."""

from __future__ import annotations

import hashlib
import logging
from typing import Callable, Optional

import jwt

from ..contracts import HeaderMap, TokenConfig
from ..errors import ArgumentError, SigningError
from ..utils.clock import epoch_millis
from ..utils.encoding import b64_encode, compact_json
from .keys import import_key

logger = logging.getLogger(__name__)

JWS_ALGORITHM = "RS256"
JWS_TTL_MS = 300_000
DIGEST_ALGORITHM = "SHA-256"


def sha256_digest(value: str) -> str:
    """Return the standard base64 SHA-256 digest of ``value``'s UTF-8 bytes."""
    return b64_encode(hashlib.sha256(value.encode("utf-8")).digest())


class JwsSigner:
    """Signs a digest of an arbitrary string with the merchant's private key.

    Payload claims: ``digest``, ``digestAlgorithm``, ``exp`` (number) and
    ``iat`` (string). Header claims: ``alg``, ``issued-by``, ``kid``,
    ``x-gl-merchantId``, ``x-gl-enc`` and ``is-digested``; the last two are
    the string ``"true"``.
    """

    def __init__(
        self, *, ttl_ms: int = JWS_TTL_MS, clock: Callable[[], int] = epoch_millis
    ) -> None:
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._jws = jwt.PyJWS()

    def build_headers(self, config: TokenConfig) -> HeaderMap:
        return {
            "issued-by": config.merchant_id,
            "kid": config.private_key_id,
            "x-gl-merchantId": config.merchant_id,
            "x-gl-enc": "true",
            "is-digested": "true",
        }

    def sign(self, to_digest: Optional[str], config: TokenConfig) -> str:
        """Return the compact JWS over the digest of ``to_digest``.

        An empty string is valid input.

        Raises:
            ConfigError: If merchantId, privateKeyId or the sender key PEM is
                blank.
            ArgumentError: If ``to_digest`` is ``None`` or not a string.
            KeyFormatError: If the sender key PEM cannot be imported.
            SigningError: If the signature cannot be produced.
        """
        config.require("merchant_id", "private_key_id", "sender_private_key_pem")
        if to_digest is None:
            raise ArgumentError("to_digest is required")
        if not isinstance(to_digest, str):
            raise ArgumentError(
                f"to_digest must be a string, got {type(to_digest).__name__}"
            )

        iat = self._clock()
        payload = {
            "digest": sha256_digest(to_digest),
            "digestAlgorithm": DIGEST_ALGORITHM,
            "exp": iat + self.ttl_ms,
            "iat": str(iat),
        }
        private_key = import_key(config.sender_private_key_pem, want_private=True)

        # typ=None drops PyJWT's default "typ" header.
        headers = {"typ": None, **self.build_headers(config)}
        try:
            token = self._jws.encode(
                compact_json(payload).encode("utf-8"),
                private_key,
                algorithm=JWS_ALGORITHM,
                headers=headers,
                sort_headers=False,
            )
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            raise SigningError(f"JWS signing failed: {exc}") from exc

        logger.debug(
            f"Generated JWS kid={config.private_key_id} issued-by={config.merchant_id}"
        )
        return token


def generate_jws(to_digest: Optional[str], config: TokenConfig) -> str:
    """Sign the digest of ``to_digest`` using the default signer."""
    return JwsSigner().sign(to_digest, config)
