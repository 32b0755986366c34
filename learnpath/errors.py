"""
Error types for LearnPath.

Read paths degrade to safe defaults and never raise these. Write paths
raise StorageWriteError; scoring against an unknown quiz raises
QuizNotFoundError.
"""


class LearnPathError(Exception):
    """Base LearnPath error."""

    def __init__(self, message: str, code: str = "learnpath_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CatalogUnavailableError(LearnPathError):
    """Content catalog or quiz bank could not be fetched or parsed."""

    def __init__(self, message: str = "Failed to load courses"):
        super().__init__(message, "catalog_unavailable")


class StorageWriteError(LearnPathError):
    """Persistence medium rejected a write or remove."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        message = f"Failed to persist '{key}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, "storage_write_failed")


class QuizNotFoundError(LearnPathError):
    """No quiz definition matches the requested id."""

    def __init__(self, quiz_id: str):
        self.quiz_id = quiz_id
        super().__init__(f"Quiz not found: {quiz_id}", "quiz_not_found")


class AttemptAlreadySubmittedError(LearnPathError):
    """An attempt is graded once; resubmitting it is rejected."""

    def __init__(self, quiz_id: str):
        self.quiz_id = quiz_id
        super().__init__(f"Attempt for quiz {quiz_id} was already submitted", "attempt_submitted")
