"""Common exception classes."""

import re


class BaseError(Exception):
    """Generic exception class which other exceptions should inherit from."""

    def __init__(self, *args, error_code: str = None, **kwargs):
        """Initialize a BaseError instance."""
        super().__init__(*args, **kwargs)
        self.error_code = error_code or None

    @property
    def message(self) -> str:
        """Accessor for the error message."""
        return str(self.args[0]).strip() if self.args else ""

    @property
    def roll_up(self) -> str:
        """Accessor for the messages of this error and its causes on one line."""

        def flatten(exc: BaseException) -> str:
            text = str(exc.args[0]) if exc.args else exc.__class__.__name__
            return re.sub(r"\s*\n\s*", " ", text).strip().rstrip(".")

        parts = []
        err = self
        while err:
            parts.append(flatten(err))
            err = err.__cause__
        return ". ".join(parts) + "."
