"""Project-wide custom exception types."""


class CSVImportError(ValueError):
    """Raised when a CSV upload yields no importable survey rows."""

    def __init__(self, message: str) -> None:  # noqa: D401 – simple constructor
        super().__init__(message)
