"""Exception taxonomy for catalog access and game search.

Routers translate these into HTTP responses; the services never deal in
status codes of their own.
"""


class GameScopeError(Exception):
    """Base error carrying a machine-readable code."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class UpstreamUnavailable(GameScopeError):
    """The catalog API could not be reached or answered with a non-2xx status."""

    code = "UPSTREAM_UNAVAILABLE"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AllVariantsFailed(GameScopeError):
    """Every search variant failed or the merged candidate pool is empty."""

    code = "ALL_VARIANTS_FAILED"

    def __init__(self, variants: list[str], failed: int):
        super().__init__(
            f"No candidates from {len(variants)} search variant(s) ({failed} failed)"
        )
        self.variants = variants
        self.failed = failed


class InvalidInput(GameScopeError, ValueError):
    """Caller passed a query or filters that violate the input contract."""

    code = "INVALID_INPUT"


class SearchFailed(GameScopeError):
    """Terminal search failure; no partial data is returned."""

    code = "SEARCH_FAILED"


class GameNotFound(GameScopeError):
    code = "GAME_NOT_FOUND"
