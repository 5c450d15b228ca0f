"""Core enums (error codes, environments)."""

from authcore.core.enums.environment import Environment
from authcore.core.enums.error_code import ErrorCode

__all__ = ["Environment", "ErrorCode"]
