"""JOSE token builders: key import, JWE, JWS and the pair of them."""

from .jwe import JweEncoder, generate_jwe
from .jws import JwsSigner, generate_jws
from .keys import import_key
from .tokens import TokenOrchestrator, generate_tokens

__all__ = [
    "JweEncoder",
    "JwsSigner",
    "TokenOrchestrator",
    "generate_jwe",
    "generate_jws",
    "generate_tokens",
    "import_key",
]
