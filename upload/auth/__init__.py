"""
Authentication Package

Bearer token handling for the EchoReads backend.
"""

from upload.auth.token_manager import TokenManager

__all__ = [
    "TokenManager",
]
