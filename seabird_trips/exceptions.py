"""Exceptions raised for structurally malformed trajectory files."""


class TrajectoryFormatError(ValueError):
    """A trajectory file cannot be turned into fixes."""


class MissingColumnError(TrajectoryFormatError, KeyError):
    """A required column has no matching header in the file."""

    def __init__(self, column: str, available):
        self.column = column
        self.available = list(available)
        super().__init__(f"No column for '{column}' among {self.available}")

    def __str__(self) -> str:
        return self.args[0]
