"""Generation of the JWE and the JWS that authenticates it."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..contracts import TokenConfig, TokenResult
from .jwe import JweEncoder
from .jws import JwsSigner

logger = logging.getLogger(__name__)


class TokenOrchestrator:
    """Builds the encrypted payload token and its detached authenticity token.

    The JWS carries a digest of the compact JWE string, so the receiver can
    check the sender and the integrity of the encrypted blob before
    decrypting it.
    """

    def __init__(
        self,
        encoder: Optional[JweEncoder] = None,
        signer: Optional[JwsSigner] = None,
    ) -> None:
        self.encoder = encoder or JweEncoder()
        self.signer = signer or JwsSigner()

    def generate(self, payload: Any, config: TokenConfig) -> TokenResult:
        """Return both tokens; any error from either step propagates."""
        jwe = self.encoder.encode(payload, config)
        # JWS over the JWE, never over the plaintext payload.
        jws = self.signer.sign(jwe, config)
        logger.debug(f"Generated token pair for merchant {config.merchant_id}")
        return TokenResult(jwe=jwe, jws=jws)


def generate_tokens(payload: Any, config: TokenConfig) -> TokenResult:
    """Generate the JWE for ``payload`` and the JWS over that JWE."""
    return TokenOrchestrator().generate(payload, config)
