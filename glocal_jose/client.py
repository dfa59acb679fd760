"""HTTP client for the payment initiation endpoint."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from pydantic import BaseModel

from .config import DEFAULT_API_BASE_URL
from .contracts import TokenConfig, TokenResult
from .security.tokens import TokenOrchestrator

logger = logging.getLogger(__name__)

INITIATE_PATH = "/gl/v1/payments/initiate/paycollect"
TOKEN_HEADER = "x-gl-token-external"


class InitiateResponse(BaseModel):
    """Raw response from the provider, passed through unchanged."""

    status_code: int
    body: str
    content_type: str = "application/json"


class PaymentClient:
    """Sends the JWE as the request body and the JWS as a header."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30,
        orchestrator: Optional[TokenOrchestrator] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.orchestrator = orchestrator or TokenOrchestrator()

    @property
    def initiate_url(self) -> str:
        return f"{self.base_url}{INITIATE_PATH}"

    def send(self, tokens: TokenResult) -> InitiateResponse:
        """POST an already generated token pair."""
        resp = requests.post(
            self.initiate_url,
            data=tokens.jwe.encode("utf-8"),
            headers={
                "Content-Type": "text/plain; charset=utf-8",
                TOKEN_HEADER: tokens.jws,
            },
            timeout=self.timeout,
        )
        logger.info(f"Payment initiation returned HTTP {resp.status_code}")
        return InitiateResponse(
            status_code=resp.status_code,
            body=resp.text,
            content_type=resp.headers.get("Content-Type") or "application/json",
        )

    def initiate(self, payload: Any, config: TokenConfig) -> InitiateResponse:
        """Generate tokens for ``payload`` and send them."""
        tokens = self.orchestrator.generate(payload, config)
        return self.send(tokens)
