"""Error definitions for build store operations.

Each error carries a stable code that the web layer and the client use
to translate between exceptions and HTTP responses. All of them are
terminal: retrying the same call yields the same error.
"""

# Error code constants
BUILD_EXISTS = "build_exists"
BUILD_NOT_FOUND = "build_not_found"
INCONSISTENT_IDS = "inconsistent_ids"
CLIENT_ERROR = "client_error"


class BuildServiceError(Exception):
    """Base error for build service operations."""

    def __init__(self, message: str, code: str = "build_service_error") -> None:
        super().__init__(message)
        self.code = code


class BuildExistsError(BuildServiceError):
    """Raised when creating a build whose ID is already stored."""

    def __init__(self, build_id: str) -> None:
        super().__init__(f"Build already exists: {build_id}", code=BUILD_EXISTS)
        self.build_id = build_id


class BuildNotFoundError(BuildServiceError):
    """Raised when a build is not found."""

    def __init__(self, build_id: str) -> None:
        super().__init__(f"Build not found: {build_id}", code=BUILD_NOT_FOUND)
        self.build_id = build_id


class InconsistentIDsError(BuildServiceError):
    """Raised when the target ID and the payload ID disagree."""

    def __init__(self, build_id: str, payload_id: str) -> None:
        super().__init__(
            f"Inconsistent IDs: path has {build_id!r}, payload has {payload_id!r}",
            code=INCONSISTENT_IDS,
        )
        self.build_id = build_id
        self.payload_id = payload_id


class BuildClientError(BuildServiceError):
    """Raised when the build server returns an unexpected response."""

    def __init__(
        self, message: str, status_code: int | None = None, code: str = CLIENT_ERROR
    ) -> None:
        super().__init__(message, code=code)
        self.status_code = status_code


__all__ = [
    "BUILD_EXISTS",
    "BUILD_NOT_FOUND",
    "CLIENT_ERROR",
    "INCONSISTENT_IDS",
    "BuildClientError",
    "BuildExistsError",
    "BuildNotFoundError",
    "BuildServiceError",
    "InconsistentIDsError",
]
