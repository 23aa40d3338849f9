"""Lookup exceptions."""

from depfilter.domain.exceptions.base import DepFilterError


class FilterNotFoundError(DepFilterError):
    """No filter registered under the requested key.

    Attributes:
        key: Requested key as given by the caller
    """

    def __init__(self, key: str) -> None:
        if not key:
            raise ValueError("key must not be empty")

        self.key = key
        super().__init__(f"filter '{key}' not found")
