"""Clear exceptions for panel-joinmap: unreadable input, missing models and empty join counts."""

from pathlib import Path


class JoinMapError(Exception):
    """Base exception for panel-joinmap."""

    pass


class InputUnreadableError(JoinMapError):
    """Raised when the project file cannot be read (wraps the underlying OSError)."""

    def __init__(self, path: str | Path, cause: BaseException | None = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot read input file {str(self.path)!r}{detail}")


class ModelNotFoundError(JoinMapError):
    """Raised when a required model has no device block in the document."""

    def __init__(self, model: str, message: str | None = None) -> None:
        self.model = model
        self._msg = message or f"No device block found for model {model!r}"
        super().__init__(self._msg)


class ZeroCountError(JoinMapError):
    """Raised when a required model's block declares no inputs (nI missing or 0)."""

    def __init__(self, model: str, instance: int = 1, message: str | None = None) -> None:
        self.model = model
        self.instance = instance
        self._msg = message or f"Device block {instance} for model {model!r} declares a total input count of 0"
        super().__init__(self._msg)
