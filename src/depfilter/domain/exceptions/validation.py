"""Key and lifecycle validation exceptions."""

from depfilter.domain.exceptions.base import DepFilterError


class InvalidFilterKeyError(DepFilterError):
    """Malformed filter, group or total key.

    FAIL-FIRST: raised when the key is created, not when it is used.

    Attributes:
        key: Offending key (may be empty)
        reason: Why key is invalid (must not be empty)
    """

    def __init__(self, key: str, reason: str) -> None:
        if not reason:
            raise ValueError("reason must not be empty")

        self.key = key
        self.reason = reason
        super().__init__(f"Invalid filter key '{key}': {reason}")


class FilterStateError(DepFilterError):
    """Operation not allowed in the current lifecycle state.

    Attributes:
        reason: What was attempted (must not be empty)
    """

    def __init__(self, reason: str) -> None:
        if not reason:
            raise ValueError("reason must not be empty")

        self.reason = reason
        super().__init__(reason)
