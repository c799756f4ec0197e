"""External service clients used by the API and ingestion commands."""

from .google_auth import GoogleAuthError, GoogleIdentity, GoogleTokenVerifier
from .pokeapi import PokeAPIClient, PokeAPIClientError

__all__ = [
    "GoogleAuthError",
    "GoogleIdentity",
    "GoogleTokenVerifier",
    "PokeAPIClient",
    "PokeAPIClientError",
]
