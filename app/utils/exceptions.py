"""
Domain exceptions for the portal.

Services raise these instead of HTTPException; the handlers registered in
main.py turn them into JSON error bodies with the matching status code:

    ValidationError      400  missing or invalid input, path traversal
    NoFileError          400  expected upload field absent
    PayloadTooLargeError 413  upload over MAX_UPLOAD_BYTES
    AuthError            401  bad credentials
    StorageError         500  database or filesystem failure
    ProcessingError      500  image decode / resize / encode failure
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """Base exception for all portal errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(PortalError):
    status_code = 400

    def __init__(self, message: str = "Invalid input", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class NoFileError(ValidationError):
    def __init__(self, field: str):
        super().__init__("No file uploaded", details={"field": field})
        self.code = "NO_FILE"


class PayloadTooLargeError(ValidationError):
    status_code = 413

    def __init__(self, limit: int):
        super().__init__(
            f"File too large. Maximum size is {limit // (1024 * 1024)}MB",
            details={"max_bytes": limit},
        )
        self.code = "PAYLOAD_TOO_LARGE"


class AuthError(PortalError):
    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message, code="AUTH_FAILED")


class StorageError(PortalError):
    status_code = 500

    def __init__(self, message: str = "Storage error"):
        super().__init__(message, code="STORAGE_ERROR")


class ProcessingError(PortalError):
    status_code = 500

    def __init__(self, message: str = "Error processing image"):
        super().__init__(message, code="PROCESSING_ERROR")
