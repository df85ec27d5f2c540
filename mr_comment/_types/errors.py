"""
Exception types raised across mr-comment.

Every failure the CLI reports to the user derives from MrCommentError, so
main() can tell expected failures apart from genuine bugs.
"""


class MrCommentError(Exception):
    """Base class for all mr-comment errors."""


class ConfigError(MrCommentError):
    """Missing or invalid credential, or a malformed config file."""


class DiffAcquisitionError(MrCommentError):
    """The diff could not be obtained from git or from a file."""


class EmptyDiffError(DiffAcquisitionError):
    """The normalized diff has nothing worth sending to a model."""


class ApiError(MrCommentError):
    """Base class for provider failures."""


class RequestFailedError(ApiError):
    """Transport failure or non-success HTTP status from a provider."""


class ParseFailureError(ApiError):
    """The response body did not have the expected shape."""


class EmptyResponseError(ApiError):
    """The response was well-formed but carried no usable text."""


class OutputError(MrCommentError):
    """The generated comment could not be written to its destination."""
