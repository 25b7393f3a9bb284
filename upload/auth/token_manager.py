"""
Token Manager

Holds the bearer token sent with every backend request.

The token is kept in memory on an explicitly passed object: the factory
builds one from ECHOREADS_API_TOKEN, tests build their own.
"""

import logging
import time
from typing import Any, Dict, Optional

from upload.constants import TOKEN_VISIBLE_CHARS


class TokenManager:
    """
    In-memory bearer token store with optional expiry.

    Usage:
        tokens = TokenManager(token="abc...", expires_at=time.time() + 3600)
        headers = {"Authorization": f"Bearer {tokens.get_token()}"}
    """

    def __init__(self, token: Optional[str] = None, expires_at: Optional[float] = None):
        """
        Args:
            token: Bearer token, or None if not authenticated yet
            expires_at: Unix timestamp after which the token is invalid
        """
        self.logger = logging.getLogger(__name__)
        self._token = token or None
        self._expires_at = expires_at

    def get_token(self) -> Optional[str]:
        """
        Get the current token.

        An expired token is cleared and None is returned.
        """
        if self._token and self.is_expired():
            self.logger.warning("Bearer token expired, clearing it")
            self.clear()
        return self._token

    def set_token(self, token: str, expires_at: Optional[float] = None) -> None:
        """
        Store a new token.

        Raises:
            ValueError: If token is empty
        """
        if not token or not isinstance(token, str):
            raise ValueError("Invalid token format")

        self._token = token
        self._expires_at = expires_at
        self.logger.debug("Bearer token updated")

    def clear(self) -> None:
        """Forget the token"""
        self._token = None
        self._expires_at = None

    def is_expired(self) -> bool:
        """No expiry set means never expired"""
        if self._expires_at is None:
            return False
        return time.time() >= self._expires_at

    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def get_status(self) -> Dict[str, Any]:
        """
        Authentication status with the token masked.
        """
        token = self.get_token()
        return {
            "is_authenticated": token is not None,
            "expires_at": self._expires_at,
            "token": f"{token[:TOKEN_VISIBLE_CHARS]}..." if token else None,
        }
