"""
Structured error handling for web interface.

Provides error codes, categories, and consistent error response formatting.
"""

from enum import Enum
from typing import Dict, Any, Optional, List


class ErrorCategory(Enum):
    """Error categories for classification."""
    NEWS_SOURCE = "news_source"
    VALIDATION = "validation"
    NETWORK = "network"
    PERMISSION = "permission"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorCode(Enum):
    """Error codes for specific error types."""
    NEWS_LOAD_FAILED = "NEWS_LOAD_FAILED"
    
    INVALID_INPUT = "INVALID_INPUT"
    
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    
    PERMISSION_DENIED = "PERMISSION_DENIED"
    
    SYSTEM_ERROR = "SYSTEM_ERROR"
    
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class WebInterfaceError(Exception):
    """
    Structured error for web interface responses.
    
    Provides consistent error format with error codes, categories,
    messages, and context.
    """
    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        category: Optional[ErrorCategory] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggested_fixes: Optional[List[str]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.category = category or self._infer_category(error_code)
        self.details = details
        self.context = context or {}
        self.suggested_fixes = suggested_fixes or self._get_default_suggestions(error_code)
        self.original_error = original_error
    
    def _infer_category(self, error_code: ErrorCode) -> ErrorCategory:
        """Infer error category from error code."""
        code_str = error_code.value
        
        if code_str.startswith("NEWS_"):
            return ErrorCategory.NEWS_SOURCE
        elif code_str == "INVALID_INPUT":
            return ErrorCategory.VALIDATION
        elif code_str.startswith("NETWORK_") or code_str == "TIMEOUT":
            return ErrorCategory.NETWORK
        elif code_str.startswith("PERMISSION_"):
            return ErrorCategory.PERMISSION
        elif code_str.startswith("SYSTEM_"):
            return ErrorCategory.SYSTEM
        else:
            return ErrorCategory.UNKNOWN
    
    def _get_default_suggestions(self, error_code: ErrorCode) -> List[str]:
        """Get default suggested fixes for error code."""
        suggestions_map = {
            ErrorCode.NEWS_LOAD_FAILED: [
                "Check that news.txt exists in the news directory",
                "Verify the news files are readable UTF-8 text",
            ],
            ErrorCode.PERMISSION_DENIED: [
                "Check file/directory permissions",
                "Check if running with correct user",
            ],
        }
        
        return suggestions_map.get(error_code, ["Review error details and try again"])
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON response."""
        result = {
            "status": "error",
            "error_code": self.error_code.value,
            "error_category": self.category.value,
            "message": self.message,
        }
        
        if self.details:
            result["details"] = self.details
        
        if self.context:
            result["context"] = self.context
        
        if self.suggested_fixes:
            result["suggested_fixes"] = self.suggested_fixes
        
        return result
    
    @classmethod
    def from_exception(
        cls,
        exception: Exception,
        error_code: Optional[ErrorCode] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> 'WebInterfaceError':
        """
        Create WebInterfaceError from an exception.
        
        Args:
            exception: Exception to convert
            error_code: Optional specific error code
            context: Optional additional context
        """
        if not error_code:
            error_code = cls._infer_error_code(exception)
        
        error_context = context or {}
        error_context['exception_type'] = type(exception).__name__
        
        return cls(
            error_code=error_code,
            message=str(exception),
            details=cls._get_exception_details(exception),
            context=error_context,
            original_error=exception
        )
    
    @classmethod
    def _infer_error_code(cls, exception: Exception) -> ErrorCode:
        """Infer error code from exception type."""
        exception_name = type(exception).__name__
        
        if "NewsSource" in exception_name:
            return ErrorCode.NEWS_LOAD_FAILED
        elif "Permission" in exception_name:
            return ErrorCode.PERMISSION_DENIED
        elif "Connection" in exception_name:
            return ErrorCode.NETWORK_ERROR
        elif "Timeout" in exception_name:
            return ErrorCode.TIMEOUT
        else:
            return ErrorCode.UNKNOWN_ERROR
    
    @classmethod
    def _get_exception_details(cls, exception: Exception) -> Optional[str]:
        """Get additional details from exception."""
        if hasattr(exception, 'context') and isinstance(exception.context, dict):
            details_parts = []
            for key, value in exception.context.items():
                if key not in ['exception_type']:
                    details_parts.append(f"{key}: {value}")
            if details_parts:
                return "; ".join(details_parts)
        
        return None
