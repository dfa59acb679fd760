"""glocal-jose: JWE and JWS token generation for PayGlocal payment requests."""

from .contracts import TokenConfig, TokenResult
from .errors import (
    ArgumentError,
    ConfigError,
    EncryptionError,
    JoseTokenError,
    KeyFormatError,
    SigningError,
)
from .security import (
    JweEncoder,
    JwsSigner,
    TokenOrchestrator,
    generate_jwe,
    generate_jws,
    generate_tokens,
    import_key,
)

__version__ = "0.1.0"
__all__ = [
    "ArgumentError",
    "ConfigError",
    "EncryptionError",
    "JoseTokenError",
    "JweEncoder",
    "JwsSigner",
    "KeyFormatError",
    "SigningError",
    "TokenConfig",
    "TokenOrchestrator",
    "TokenResult",
    "generate_jwe",
    "generate_jws",
    "generate_tokens",
    "import_key",
]
