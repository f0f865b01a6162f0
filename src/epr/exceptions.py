class EprError(Exception):
    """Base exception for summary log processing errors."""
    pass

class ConfigError(EprError):
    """Configuration loading specific errors."""
    pass

class ExtractionError(EprError):
    """The workbook could not be turned into a summary log document."""
    pass

class UploadNotFoundError(EprError):
    """The uploaded file backing a summary log is not available."""
    pass

class RepositoryError(EprError):
    """Persistence specific errors."""
    pass

class NotFoundError(RepositoryError):
    pass

class SummaryLogNotFoundError(NotFoundError):
    pass

class RegistrationNotFoundError(NotFoundError):
    pass

class VersionConflictError(RepositoryError):
    """Optimistic concurrency check failed: the stored version has moved on."""
    pass

class DuplicateSummaryLogError(RepositoryError):
    pass
