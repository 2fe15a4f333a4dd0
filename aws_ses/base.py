"""Module containing the SES connection and request dispatcher."""
import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlparse
from xml.etree import ElementTree as ET

import requests

from .exceptions import (
    ConfigurationError,
    CredentialError,
    ServerError,
    UnexpectedErrorFormat,
    error_class_for
)
from .request_signer import RequestSigner
from .responses import Response, child_text, iter_named, local_name, response_class_for

logger = logging.getLogger(__name__)

DEFAULT_HOST = 'email.us-east-1.amazonaws.com'


@dataclass(frozen=True)
class ConnectionConfig:
    """Connection options for an SES endpoint, validated on creation."""

    access_key_id: str
    secret_access_key: str
    use_ssl: bool = True
    server: str = DEFAULT_HOST
    port: Optional[int] = None
    proxy_server: Optional[str] = None
    path: str = '/'
    timeout: Optional[float] = None
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.access_key_id, str) or not self.access_key_id:
            raise ConfigurationError("No access_key_id provided")
        if not isinstance(self.secret_access_key, str) or not self.secret_access_key:
            raise ConfigurationError("No secret_access_key provided")
        if self.use_ssl is None:
            raise ConfigurationError("No use_ssl value provided")
        if not isinstance(self.use_ssl, bool):
            raise ConfigurationError(
                "Invalid use_ssl value provided, only True or False allowed"
            )
        if not self.server:
            raise ConfigurationError("No server provided")
        if self.proxy_server and not urlparse(self.proxy_server).hostname:
            raise ConfigurationError(f"Invalid proxy_server: {self.proxy_server}")

        if self.port is None:
            object.__setattr__(self, 'port', 443 if self.use_ssl else 80)

    @classmethod
    def from_env(cls, **overrides) -> 'ConnectionConfig':
        """Build a config with credentials taken from the environment.

        :param overrides: options passed through; explicit credentials win
            over AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY.
        :raise CredentialError: if no credentials are found.
        :return: ConnectionConfig, the validated config.
        """
        overrides.setdefault('access_key_id', os.environ.get('AWS_ACCESS_KEY_ID'))
        overrides.setdefault('secret_access_key', os.environ.get('AWS_SECRET_ACCESS_KEY'))

        if not overrides['access_key_id'] or not overrides['secret_access_key']:
            raise CredentialError("AWS credentials not found in environment")

        return cls(**overrides)

    @property
    def scheme(self) -> str:
        return 'https' if self.use_ssl else 'http'

    @property
    def url(self) -> str:
        path = self.path if self.path.startswith('/') else f"/{self.path}"
        return f"{self.scheme}://{self.server}:{self.port}{path}"

    @property
    def proxies(self) -> Optional[Dict[str, str]]:
        if not self.proxy_server:
            return None
        return {'http': self.proxy_server, 'https': self.proxy_server}


def check_error(response: requests.Response) -> bool:
    """Raise the error described by an unsuccessful response.

    An error body looks like::

        <ErrorResponse>
          <Error><Code>MessageRejected</Code><Message>...</Message></Error>
          <RequestId>...</RequestId>
        </ErrorResponse>

    possibly with the ``Error`` element wrapped in ``Errors``.

    :param response: requests.Response, response to inspect.
    :raise ServerError: on a 5xx status.
    :raise UnexpectedErrorFormat: if the body lacks Error/Code/Message.
    :raise SESError: the class registered for the error code, or SESError.
    :return: bool, False if the response is successful.
    """
    status = response.status_code
    if 200 <= status < 300:
        return False

    body = response.text
    if status >= 500:
        raise ServerError(
            f"Unexpected server error. response.body is: {body}",
            status_code=status,
            body=body
        )

    unexpected = UnexpectedErrorFormat(
        f"Unexpected error format. response.body is: {body}",
        status_code=status,
        body=body
    )
    try:
        root = ET.fromstring(response.content)
    except ET.ParseError as e:
        raise unexpected from e

    error = next(
        (
            element for element in root
            if local_name(element.tag) in ('Error', 'Errors')
        ),
        None
    )
    if error is not None and local_name(error.tag) == 'Errors':
        error = next(iter_named(error, 'Error'), None)
    if error is None:
        raise unexpected

    code = (child_text(error, 'Code') or '').strip()
    message = child_text(error, 'Message')
    if not code or message is None:
        raise unexpected
    message = message.strip()

    request_id = child_text(root, 'RequestId') or child_text(root, 'RequestID')
    error_class = error_class_for(code)
    logger.warning("SES returned %s (%s): %s", code, status, message)
    raise error_class(
        message,
        code=code,
        request_id=request_id,
        status_code=status,
        body=body
    )


class Base:
    """Signs and sends requests to an SES endpoint."""

    def __init__(self, config: Optional[ConnectionConfig] = None, **options) -> None:
        """Initialize the connection.

        :param config: Optional[ConnectionConfig], ready-made config.
        :param options: keyword options used to build a ConnectionConfig
            when no config is given.
        :raise ConfigurationError: if the options are missing or invalid.
        return: None, initialize the connection.
        """
        if config is None:
            config = ConnectionConfig(**options)
        elif options:
            raise ConfigurationError("Pass either a config or options, not both")

        self.config = config
        self.signer = RequestSigner(config.access_key_id, config.secret_access_key)

    @classmethod
    def from_env(cls, **options) -> 'Base':
        """Create a connection using credentials from the environment."""
        return cls(ConnectionConfig.from_env(**options))

    @property
    def connection(self) -> ConnectionConfig:
        return self.config

    @property
    def use_ssl(self) -> bool:
        return self.config.use_ssl

    @property
    def server(self) -> str:
        return self.config.server

    @property
    def port(self) -> int:
        return self.config.port

    @property
    def proxy_server(self) -> Optional[str]:
        return self.config.proxy_server

    @property
    def url(self) -> str:
        return self.config.url

    def request(self, action: str, params: Optional[Dict[str, Optional[str]]] = None) -> Response:
        """Sign and send an SES action.

        :param action: str, SES action name, e.g. SendEmail.
        :param params: Optional[Dict[str, Optional[str]]], action parameters;
            None and empty values are left out.
        :raise SESError: if the service reports an error.
        :raise ServerError: if a successful reply is not XML.
        :return: Response, parsed by the class registered for the action.
        """
        signed = self.signer.sign_request(action, params)

        logger.debug("Sending %s to %s", action, self.url)
        response = requests.post(
            self.url,
            data=signed.body,
            headers=signed.headers,
            proxies=self.config.proxies,
            timeout=self.config.timeout,
            verify=self.config.verify_ssl
        )
        logger.debug("%s returned HTTP %s", action, response.status_code)

        check_error(response)

        result = response_class_for(action)(action, response)
        # Raises ServerError here if the body is not XML.
        result.document
        return result
