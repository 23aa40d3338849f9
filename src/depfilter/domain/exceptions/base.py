"""Base exceptions for depfilter domain."""


class DepFilterError(Exception):
    """Root exception for all depfilter errors.

    All domain exceptions inherit from this.
    Allows catching all depfilter-specific errors.
    """
