"""
Recipe service errors - rendered as JSON {"message": ...} by main_async
"""
from typing import Any, Dict, Optional


class RecipeServiceError(Exception):
    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_content(self) -> Dict[str, Any]:
        content = {"message": self.message}
        if self.error is not None:
            content["error"] = self.error
        return content


class NotFound(RecipeServiceError):
    """Requested recipe does not exist"""
    status_code = 404

    def __init__(self, message: str = "Recipe not found"):
        super().__init__(message)


class BadRequest(RecipeServiceError):
    """Malformed input or a store error on read/write/delete"""
    status_code = 400


class InternalError(RecipeServiceError):
    """Store failure while appending a rating"""
    status_code = 500

    def __init__(self, error: str, message: str = "Internal server error"):
        super().__init__(message, error=error)
