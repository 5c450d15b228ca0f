"""Supported OAuth identity providers."""

from enum import Enum


class OAuthProvider(str, Enum):
    """OAuth providers that can sign a user in or be linked to an account."""

    GOOGLE = "google"
    APPLE = "apple"
    MICROSOFT = "microsoft"
