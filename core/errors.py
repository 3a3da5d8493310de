"""
Error variants surfaced to API callers.

Every failure response uses the same envelope, ``{"error": "<message>"}``.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProviderError(ServiceError):
    """The payments provider rejected or failed a request."""

    status_code = 500


class InputError(ServiceError):
    """The caller sent a request body we could not decode."""

    status_code = 400


class InternalError(ServiceError):
    """Anything else: transport failures, template or file errors."""

    status_code = 500
