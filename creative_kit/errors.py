"""Typed errors shared by the layout, copy and keyword services."""


class CreativeKitError(Exception):
    """Base error."""
    pass


class InvalidInputError(CreativeKitError, ValueError):
    """Caller supplied bad input (maps to a 4xx response)."""
    pass


class InvalidAspectRatio(InvalidInputError):
    """Aspect ratio has no canvas preset."""

    def __init__(self, aspect_ratio: str):
        self.aspect_ratio = aspect_ratio
        super().__init__(f"Unsupported aspect ratio: {aspect_ratio!r}")


class InvalidLayoutError(InvalidInputError):
    """Layout JSON failed validation."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Invalid layout JSON: " + "; ".join(problems))


class ProviderError(CreativeKitError, RuntimeError):
    """External provider call failed (maps to a 5xx response)."""

    def __init__(self, message: str, status_code: int | None = None, uri: str | None = None):
        self.status_code = status_code
        self.uri = uri
        super().__init__(message)


class ConfigurationError(CreativeKitError, RuntimeError):
    """Required environment configuration is missing."""
    pass
