"""JWE generation using RSA-OAEP-256 key wrapping and A128CBC-HS256.

Tokens use the compact serialization of RFC 7516::

    BASE64URL(header).BASE64URL(encrypted CEK).BASE64URL(IV).BASE64URL(ciphertext).BASE64URL(tag)
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from jwcrypto import jwe, jwk
from jwcrypto.common import JWException
from pydantic import BaseModel

from ..contracts import HeaderMap, TokenConfig
from ..errors import ArgumentError, EncryptionError
from ..utils.clock import epoch_millis
from ..utils.encoding import compact_json
from .keys import import_key

logger = logging.getLogger(__name__)

JWE_ALGORITHM = "RSA-OAEP-256"
JWE_ENCRYPTION = "A128CBC-HS256"
# 30 seconds, unlike the 5 minute JWS lifetime.
JWE_TTL_MS = 30_000


def serialize_payload(payload: Any) -> str:
    """Serialize a JSON payload (or pydantic model) to compact JSON text."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    try:
        return compact_json(payload)
    except (TypeError, ValueError) as exc:
        raise ArgumentError(f"payload is not JSON serializable: {exc}") from exc


class JweEncoder:
    """Encrypts JSON payloads for the provider's public key.

    Protected header: ``alg``, ``enc``, ``iat`` and ``exp`` (epoch
    milliseconds as strings), ``kid`` (the public key id) and ``issued-by``
    (the merchant id).
    """

    def __init__(
        self, *, ttl_ms: int = JWE_TTL_MS, clock: Callable[[], int] = epoch_millis
    ) -> None:
        self.ttl_ms = ttl_ms
        self._clock = clock

    def build_header(self, config: TokenConfig, iat: int) -> HeaderMap:
        return {
            "alg": JWE_ALGORITHM,
            "enc": JWE_ENCRYPTION,
            "iat": str(iat),
            "exp": str(iat + self.ttl_ms),
            "kid": config.public_key_id,
            "issued-by": config.merchant_id,
        }

    def encode(self, payload: Any, config: TokenConfig) -> str:
        """Return the compact JWE for ``payload``.

        Raises:
            ConfigError: If merchantId, publicKeyId or the recipient key PEM
                is blank.
            KeyFormatError: If the recipient key PEM cannot be imported.
            ArgumentError: If ``payload`` cannot be serialized to JSON.
            EncryptionError: If key wrapping or content encryption fails.
        """
        config.require("merchant_id", "public_key_id", "recipient_public_key_pem")
        public_key = import_key(config.recipient_public_key_pem, want_private=False)

        iat = self._clock()
        plaintext = serialize_payload(payload).encode("utf-8")
        # Passed as text so jwcrypto keeps the header key order.
        protected = compact_json(self.build_header(config, iat))

        try:
            token = jwe.JWE(
                plaintext,
                protected=protected,
                algs=[JWE_ALGORITHM, JWE_ENCRYPTION],
            )
            token.add_recipient(jwk.JWK.from_pyca(public_key))
            compact = token.serialize(compact=True)
        except (JWException, ValueError, TypeError) as exc:
            raise EncryptionError(f"JWE encryption failed: {exc}") from exc

        logger.debug(
            f"Generated JWE kid={config.public_key_id} issued-by={config.merchant_id}"
        )
        return compact


def generate_jwe(payload: Any, config: TokenConfig) -> str:
    """Encrypt ``payload`` into a compact JWE using the default encoder."""
    return JweEncoder().encode(payload, config)
