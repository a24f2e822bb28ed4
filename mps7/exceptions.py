"""
Custom exceptions for MPS7 decoding.
Every failure is fatal; callers branch on the class, not the message.
"""
from typing import Any, Dict, Optional


class MPS7Error(Exception):
    """Base exception for all MPS7 ledger errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.
        
        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputError(MPS7Error):
    """Raised when the byte source is missing or unreadable."""
    pass


class FormatError(MPS7Error):
    """Raised on bad magic, unknown record type or truncated read."""
    pass


class ValidationError(MPS7Error):
    """Raised when a decoded field is outside its documented range."""
    pass


class ConfigurationError(MPS7Error):
    """Raised when configuration is invalid."""
    pass
