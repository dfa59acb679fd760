"""Core value types shared by the token builders."""

from __future__ import annotations

from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError

JsonValue = Union[None, bool, int, float, str, List["JsonValue"], Dict[str, "JsonValue"]]
"""Any JSON-serializable value accepted as a JWE payload."""

HeaderValue = Union[str, int, bool]
HeaderMap = Dict[str, HeaderValue]

# Names reported in ConfigError.field, fixed for the verifying party.
_FIELD_NAMES = {
    "merchant_id": "merchantId",
    "public_key_id": "publicKeyId",
    "private_key_id": "privateKeyId",
    "recipient_public_key_pem": "recipientPublicKeyPem",
    "sender_private_key_pem": "senderPrivateKeyPem",
}


class TokenConfig(BaseModel):
    """Merchant identity and key material used for one token request.

    Fields can be populated by name or by the camelCase aliases the
    verifying party uses (``merchantId``, ``publicKeyId``, ...). Blank
    values are allowed at construction time; each operation checks the
    fields it consumes with :meth:`require`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    merchant_id: str = Field(default="", alias="merchantId")
    public_key_id: str = Field(
        default="", alias="publicKeyId", description="kid of the JWE recipient key"
    )
    private_key_id: str = Field(
        default="", alias="privateKeyId", description="kid of the JWS signing key"
    )
    recipient_public_key_pem: str = Field(
        default="",
        alias="payglocalPublicKey",
        description="SPKI public key or X.509 certificate PEM",
    )
    sender_private_key_pem: str = Field(
        default="",
        alias="merchantPrivateKey",
        description="PKCS#1 or PKCS#8 private key PEM",
    )

    def require(self, *fields: str) -> None:
        """Raise :class:`ConfigError` for the first blank field in ``fields``."""
        for name in fields:
            value = getattr(self, name)
            if not value or not value.strip():
                raise ConfigError(_FIELD_NAMES[name])


class TokenResult(BaseModel):
    """The compact JWE and the JWS computed over it."""

    model_config = ConfigDict(frozen=True)

    jwe: str
    jws: str
