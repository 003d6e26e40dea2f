from .dto import RefreshSessionOut, TokenConfig, TokenPairOut
from .service import TokenService, generate_refresh_secret, hash_token

__all__ = [
    "TokenService",
    "TokenConfig",
    "TokenPairOut",
    "RefreshSessionOut",
    "generate_refresh_secret",
    "hash_token",
]
