"""Core errors package.

Usage:
    from authcore.core.errors import DomainError
"""

from authcore.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
