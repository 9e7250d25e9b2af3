# app/core/exceptions.py


class BaseAppException(Exception):
    """Base class for every application exception."""
    def __init__(self, message: str = "App exception"):
        super().__init__(message)

# ==== Validation (raised before any I/O) ====

class ValidationFailure(BaseAppException):
    """A required field is missing or malformed; nothing was written."""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message)

class ProjectValidationError(ValidationFailure):
    """Project or rotation payload is invalid."""
    def __init__(self, message: str = "Project validation error"):
        super().__init__(message)

class AuditValidationError(ValidationFailure):
    """Audited field edit is invalid."""
    def __init__(self, message: str = "Audit validation error"):
        super().__init__(message)

class ReportValidationError(ValidationFailure):
    """Report text is invalid."""
    def __init__(self, message: str = "Report validation error"):
        super().__init__(message)

class UserValidationError(ValidationFailure):
    """User payload is invalid."""
    def __init__(self, message: str = "User validation error"):
        super().__init__(message)

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Resource does not exist."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)

class ProjectNotFound(NotFoundError):
    """Project does not exist."""
    def __init__(self, message: str = "Project not found"):
        super().__init__(message)

# ==== Identity ====

class AuthFailure(BaseAppException):
    """Identity provider rejected or could not resolve the session."""
    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)

# ==== Store I/O ====

class ReadFailure(BaseAppException):
    """A query or subscription snapshot failed."""
    def __init__(self, message: str = "Read failed"):
        super().__init__(message)

class WriteFailure(BaseAppException):
    """A create, update or delete was rejected by the store."""
    def __init__(self, message: str = "Write failed"):
        super().__init__(message)

# ==== Export ====

class ExportFailure(BaseAppException):
    """Archive artifact could not be serialized or delivered."""
    def __init__(self, message: str = "Export failed"):
        super().__init__(message)
