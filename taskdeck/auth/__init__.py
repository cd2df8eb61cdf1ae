"""Authentication utilities for the Taskdeck client."""

from .credentials import SecureCredentialStore, mask_token
from .session import SessionState
from .types import AuthStatus, CredentialPair, CredentialStore

__all__ = [
    "mask_token",
    "AuthStatus",
    "CredentialPair",
    "CredentialStore",
    "SecureCredentialStore",
    "SessionState",
]
