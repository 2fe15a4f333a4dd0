"""Module for SES client exceptions."""
from typing import Dict, Optional, Type


class SESClientError(Exception):
    """Base exception class for SES client errors."""


class ConfigurationError(SESClientError, ValueError):
    """Exception raised when connection options are missing or invalid."""


class CredentialError(ConfigurationError):
    """Exception raised when AWS credentials cannot be found."""


class SESError(SESClientError):
    """Exception raised when the service answers with an error.

    Also raised for error codes that have no dedicated class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        request_id: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ) -> None:
        """Initialize the service error.

        :param message: str, error message returned by the service.
        :param code: Optional[str], error code as sent by the service.
        :param request_id: Optional[str], request id of the failed call.
        :param status_code: Optional[int], HTTP status of the response.
        :param body: Optional[str], raw response body.
        return: None, initialize the error.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.request_id = request_id
        self.status_code = status_code
        self.body = body


class ServerError(SESError):
    """Exception raised on a 5xx response or an unreadable response body."""


class UnexpectedErrorFormat(SESError):
    """Exception raised when an error body is not the expected XML shape."""


ERROR_CLASSES: Dict[str, Type[SESError]] = {}


def register_error(cls: Type[SESError]) -> Type[SESError]:
    """Register an error class under its class name."""
    ERROR_CLASSES[cls.__name__] = cls
    return cls


def error_class_for(code: str) -> Type[SESError]:
    """Look up the error class for a service error code.

    Codes such as ``Sender.InvalidParameter`` are looked up with the dots
    removed, so they map to ``SenderInvalidParameter``.

    :param code: str, error code from the response.
    :return: Type[SESError], the registered class, or SESError if none.
    """
    return ERROR_CLASSES.get(code.replace('.', ''), SESError)


@register_error
class AccessDenied(SESError):
    """Exception raised when the caller lacks permission for the action."""


@register_error
class IncompleteSignature(SESError):
    """Exception raised when the request signature is incomplete."""


@register_error
class InternalFailure(SESError):
    """Exception raised when the service fails while processing the request."""


@register_error
class InvalidAction(SESError):
    """Exception raised when the requested action is not valid."""


@register_error
class InvalidClientTokenId(SESError):
    """Exception raised when the access key id does not exist."""


@register_error
class InvalidParameterCombination(SESError):
    """Exception raised when parameters that exclude each other are combined."""


@register_error
class InvalidParameterValue(SESError):
    """Exception raised when a parameter value is invalid or out of range."""


@register_error
class MalformedQueryString(SESError):
    """Exception raised when the query string contains a syntax error."""


@register_error
class MissingAuthenticationToken(SESError):
    """Exception raised when the request carries no credentials."""


@register_error
class MissingParameter(SESError):
    """Exception raised when a required parameter is missing."""


@register_error
class OptInRequired(SESError):
    """Exception raised when the account is not subscribed to the service."""


@register_error
class RequestExpired(SESError):
    """Exception raised when the request timestamp is too far from server time."""


@register_error
class ServiceUnavailable(SESError):
    """Exception raised when the service is temporarily unavailable."""


@register_error
class SignatureDoesNotMatch(SESError):
    """Exception raised when the computed signature does not match."""


@register_error
class Throttling(SESError):
    """Exception raised when the request rate is exceeded."""


@register_error
class SenderInvalidParameter(SESError):
    """Exception raised for the ``Sender.InvalidParameter`` code."""


@register_error
class SenderMissingParameter(SESError):
    """Exception raised for the ``Sender.MissingParameter`` code."""


@register_error
class AccountSendingPausedException(SESError):
    """Exception raised when email sending is disabled for the account."""


@register_error
class ConfigurationSetDoesNotExist(SESError):
    """Exception raised when the configuration set does not exist."""


@register_error
class LimitExceeded(SESError):
    """Exception raised when a resource limit has been reached."""


@register_error
class MailFromDomainNotVerifiedException(SESError):
    """Exception raised when the MAIL FROM domain is not verified."""


@register_error
class MessageRejected(SESError):
    """Exception raised when the message was rejected."""
