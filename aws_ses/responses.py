"""Module containing the SES response parsers."""
from typing import Any, Dict, Iterator, List, Optional, Type
from xml.etree import ElementTree as ET

import requests

from .exceptions import ServerError

RESPONSE_CLASSES: Dict[str, Type['Response']] = {}


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    return tag.rsplit('}', 1)[-1]


def iter_named(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield descendants of ``element`` called ``name`` in any namespace."""
    for child in element.iter():
        if local_name(child.tag) == name:
            yield child


def child_text(element: ET.Element, name: str) -> Optional[str]:
    """Return the text of the direct child called ``name``, if any."""
    for child in element:
        if local_name(child.tag) == name:
            return child.text
    return None


def register_response(cls: Type['Response']) -> Type['Response']:
    """Register a response class under its class name."""
    RESPONSE_CLASSES[cls.__name__] = cls
    return cls


def response_class_for(action: str) -> Type['Response']:
    """Return the parser registered for ``<action>Response``, or Response."""
    return RESPONSE_CLASSES.get(f"{action}Response", Response)


class Response:
    """Successful reply to an SES action."""

    def __init__(self, action: str, response: requests.Response) -> None:
        """Initialize the response.

        :param action: str, SES action that produced the response.
        :param response: requests.Response, raw HTTP response.
        return: None, initialize the response.
        """
        self.action = action
        self.response = response
        self._document: Optional[ET.Element] = None

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def body(self) -> str:
        return self.response.text

    @property
    def document(self) -> ET.Element:
        """Parsed XML root of the body.

        :raise ServerError: if the body is not XML.
        """
        if self._document is None:
            try:
                self._document = ET.fromstring(self.response.content)
            except ET.ParseError as e:
                raise ServerError(
                    f"Unable to parse {self.action} response: {str(e)}",
                    status_code=self.status_code,
                    body=self.body
                ) from e
        return self._document

    @property
    def request_id(self) -> Optional[str]:
        return self.find_text('RequestId')

    def find_text(self, name: str) -> Optional[str]:
        """Return the text of the first element called ``name``."""
        for element in iter_named(self.document, name):
            return element.text
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} action={self.action!r} status={self.status_code}>"


@register_response
class SendEmailResponse(Response):
    """Reply to SendEmail carrying the id of the queued message."""

    @property
    def message_id(self) -> Optional[str]:
        return self.find_text('MessageId')


@register_response
class SendRawEmailResponse(SendEmailResponse):
    """Reply to SendRawEmail carrying the id of the queued message."""


@register_response
class ListVerifiedEmailAddressesResponse(Response):
    """Reply to ListVerifiedEmailAddresses."""

    @property
    def addresses(self) -> List[str]:
        """Verified addresses, in the order the service listed them."""
        addresses = []
        for container in iter_named(self.document, 'VerifiedEmailAddresses'):
            addresses.extend(
                member.text for member in container
                if local_name(member.tag) == 'member' and member.text
            )
        return addresses


@register_response
class VerifyEmailAddressResponse(Response):
    """Reply to VerifyEmailAddress; the service sends no result fields."""


@register_response
class DeleteVerifiedEmailAddressResponse(Response):
    """Reply to DeleteVerifiedEmailAddress; the service sends no result fields."""


@register_response
class GetSendQuotaResponse(Response):
    """Sending limits of the account."""

    def _float(self, name: str) -> Optional[float]:
        value = self.find_text(name)
        return float(value) if value is not None else None

    @property
    def max_24_hour_send(self) -> Optional[float]:
        return self._float('Max24HourSend')

    @property
    def max_send_rate(self) -> Optional[float]:
        return self._float('MaxSendRate')

    @property
    def sent_last_24_hours(self) -> Optional[float]:
        return self._float('SentLast24Hours')


@register_response
class GetSendStatisticsResponse(Response):
    """Sending activity in 15 minute intervals over the last two weeks."""

    FIELDS = {
        'Timestamp': 'timestamp',
        'DeliveryAttempts': 'delivery_attempts',
        'Bounces': 'bounces',
        'Complaints': 'complaints',
        'Rejects': 'rejects'
    }

    @property
    def data_points(self) -> List[Dict[str, Any]]:
        points = []
        for member in iter_named(self.document, 'member'):
            point: Dict[str, Any] = {}
            for tag, key in self.FIELDS.items():
                value = child_text(member, tag)
                if value is None:
                    continue
                point[key] = value if tag == 'Timestamp' else int(value)
            points.append(point)
        return sorted(points, key=lambda point: point.get('timestamp', ''))
