"""Client for the Amazon Simple Email Service Query API."""
from .base import DEFAULT_HOST, Base, ConnectionConfig, check_error
from .client import SESClient
from .exceptions import (
    ERROR_CLASSES,
    ConfigurationError,
    CredentialError,
    SESClientError,
    SESError,
    ServerError,
    UnexpectedErrorFormat,
    error_class_for,
    register_error
)
from .request_signer import API_VERSION, RequestSigner, SignedRequest, authorization_header, sign
from .responses import RESPONSE_CLASSES, Response, register_response, response_class_for

__version__ = '0.1.0'

__all__ = (
    'API_VERSION',
    'Base',
    'ConfigurationError',
    'ConnectionConfig',
    'CredentialError',
    'DEFAULT_HOST',
    'ERROR_CLASSES',
    'RESPONSE_CLASSES',
    'RequestSigner',
    'Response',
    'SESClient',
    'SESClientError',
    'SESError',
    'ServerError',
    'SignedRequest',
    'UnexpectedErrorFormat',
    'authorization_header',
    'check_error',
    'error_class_for',
    'register_error',
    'register_response',
    'response_class_for',
    'sign',
)
