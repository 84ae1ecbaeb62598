"""
Custom exception classes for pagination.

This module defines the errors raised by the resolver, the paged
collection and the finder registry. Database and Redis errors are not
wrapped; they propagate from SQLAlchemy and redis-py unchanged.
"""


class PaginationError(Exception):
    """
    Base class for all pagination errors.

    Also raised directly for misuse of a collection, such as setting the
    total entry count more than once.
    """

    pass


class InvalidConfigError(PaginationError, ValueError):
    """
    Pagination configuration is invalid.

    Raised when per_page is not a positive integer after defaulting, when a
    negative total entry count is supplied, or when a finder receives the
    wrong number of values.
    """

    pass


class MissingTotalCountError(PaginationError):
    """
    Total entry count is not known yet.

    Raised when derived metadata (total pages, out-of-bounds, next page) is
    read before the total entry count has been set. This is a programming
    error and is never recovered locally.
    """

    pass


class UnknownFinderError(PaginationError, LookupError):
    """
    No finder is registered under the requested name.
    """

    pass
