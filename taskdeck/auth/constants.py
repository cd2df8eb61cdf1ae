"""Constants for Taskdeck authentication and credential storage."""

from __future__ import annotations

# Keyring entry holding the JSON-encoded credential pair
KEYRING_SERVICE_NAME = "taskdeck"
KEYRING_USERNAME = "credentials"

# Fallback file, inside the config dir, used when no keyring backend exists
CREDENTIALS_FILE = "credentials.json"

# Error payload messages the backend uses for an expired or revoked access token
TOKEN_EXPIRED_MESSAGES = frozenset({"Token has expired", "Token is not valid anymore"})

# Error messages
ERROR_REFRESH_FAILED = "Refresh failed"
ERROR_SESSION_EXPIRED = "Session expired. Please log in again."
