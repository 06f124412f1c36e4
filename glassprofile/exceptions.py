from typing import Hashable, Optional

class GlassProfileError(Exception):
    """Base class for all glassprofile exceptions."""
    pass

class ConfigurationError(GlassProfileError):
    """Raised when there is an error in the configuration."""
    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original: {str(self.original_exception)})"
        return self.message

class EmptyProfileError(GlassProfileError, ZeroDivisionError):
    """Raised when an average is requested from a profile with no recorded calls."""
    def __init__(self, message: str, signature: Optional[Hashable] = None):
        super().__init__(message)
        self.message = message
        self.signature = signature

    def __str__(self) -> str:
        if self.signature is not None:
            return f"{self.message} (signature: {self.signature})"
        return self.message

class SignatureError(GlassProfileError, ValueError):
    """Raised when a method signature cannot be derived."""
    pass
