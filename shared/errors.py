"""
Shared error handling for the HTTP compression layer.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""
    
    code: str
    message: str
    details: Dict[str, Any] = {}


class CompressionLayerException(Exception):
    """Base exception for the compression layer."""
    
    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)
    
    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ConfigurationError(CompressionLayerException, ValueError):
    """Configuration could not be loaded.

    Raised at configuration-load time only, never while matching a request.
    """
    
    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)
