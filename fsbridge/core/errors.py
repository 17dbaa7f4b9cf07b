"""Exception classes for bridge configuration and unsupported-feature failures.

Host I/O failures are never raised past the facade; the exceptions here are
the ones that are allowed to terminate a guest call.
"""

from __future__ import annotations


class FileBridgeError(Exception):
    """Base exception for all file bridge failures.

    Catch this type to handle any error that the bridge refuses to translate
    into a guest-visible boolean or null result.
    """

    pass


class ConfigurationError(FileBridgeError):
    """Raised when a guest call uses an unsupported argument combination.

    Examples are non-user search-path domain masks, un-expanded tilde paths,
    non-nil attribute dictionaries, or a relative path where an absolute one
    is required. These indicate an unimplemented feature rather than a
    runtime condition and abort the call.
    """

    pass


class UnsupportedFeatureError(FileBridgeError):
    """Raised when a call reaches a path the bridge cannot yet service.

    Used when the guest asked for a structured error object on a failure
    path, when a copy fails part way, or when an unknown search-path
    directory is requested.
    """

    pass


class PathEscapeError(FileBridgeError):
    """Raised by the disk backend when a path resolves outside the host root.

    The resolver already clamps parent-directory segments, so this only fires
    when the host directory itself contains an escaping link. The facade
    treats it as a host failure.
    """

    pass


class ConfigValidationError(FileBridgeError):
    """Raised when bridge configuration is invalid.

    This exception wraps Pydantic ValidationError with a clearer
    domain-specific name for bridge consumers.
    """

    pass
