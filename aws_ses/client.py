"""Module containing the SESClient with one method per SES action."""
import base64
from email.message import Message
from typing import Dict, Iterable, Optional, Union

from .base import Base
from .responses import (
    DeleteVerifiedEmailAddressResponse,
    GetSendQuotaResponse,
    GetSendStatisticsResponse,
    ListVerifiedEmailAddressesResponse,
    SendEmailResponse,
    SendRawEmailResponse,
    VerifyEmailAddressResponse
)

Addresses = Optional[Union[str, Iterable[str]]]


def member_params(prefix: str, values: Addresses) -> Dict[str, str]:
    """Expand values into ``<prefix>.member.N`` query parameters."""
    if values is None:
        return {}
    if isinstance(values, str):
        values = [values]
    return {
        f"{prefix}.member.{index}": value
        for index, value in enumerate(values, start=1)
    }


class SESClient(Base):
    """SES connection exposing the supported actions as methods."""

    def send_email(
        self,
        source: str,
        to_addresses: Addresses,
        subject: str,
        text_body: Optional[str] = None,
        html_body: Optional[str] = None,
        cc_addresses: Addresses = None,
        bcc_addresses: Addresses = None,
        reply_to_addresses: Addresses = None,
        return_path: Optional[str] = None,
        charset: Optional[str] = None
    ) -> SendEmailResponse:
        """Send a formatted email.

        :param source: str, sender address.
        :param to_addresses: Addresses, recipient address or addresses.
        :param subject: str, message subject.
        :param text_body: Optional[str], plain text body.
        :param html_body: Optional[str], HTML body.
        :param cc_addresses: Addresses, carbon copy recipients.
        :param bcc_addresses: Addresses, blind carbon copy recipients.
        :param reply_to_addresses: Addresses, reply-to addresses.
        :param return_path: Optional[str], address bounces are sent to.
        :param charset: Optional[str], charset of subject and bodies.
        :raise ValueError: if there is no body or no recipient.
        :return: SendEmailResponse, holding the message id.
        """
        if not text_body and not html_body:
            raise ValueError("send_email needs a text_body or an html_body")

        params = {
            'Source': source,
            'ReturnPath': return_path,
            'Message.Subject.Data': subject,
            'Message.Subject.Charset': charset,
            'Message.Body.Text.Data': text_body,
            'Message.Body.Html.Data': html_body
        }
        if text_body:
            params['Message.Body.Text.Charset'] = charset
        if html_body:
            params['Message.Body.Html.Charset'] = charset

        destinations = {}
        destinations.update(member_params('Destination.ToAddresses', to_addresses))
        destinations.update(member_params('Destination.CcAddresses', cc_addresses))
        destinations.update(member_params('Destination.BccAddresses', bcc_addresses))
        if not destinations:
            raise ValueError("send_email needs at least one recipient")

        params.update(destinations)
        params.update(member_params('ReplyToAddresses', reply_to_addresses))
        return self.request('SendEmail', params)

    def send_raw_email(
        self,
        raw_message: Union[str, bytes, Message],
        source: Optional[str] = None,
        destinations: Addresses = None
    ) -> SendRawEmailResponse:
        """Send a message exactly as given, headers included.

        :param raw_message: Union[str, bytes, Message], full MIME message.
        :param source: Optional[str], sender address, else taken from the
            message headers.
        :param destinations: Addresses, recipients, else taken from the
            message headers.
        :return: SendRawEmailResponse, holding the message id.
        """
        if isinstance(raw_message, Message):
            raw_message = raw_message.as_bytes()
        elif isinstance(raw_message, str):
            raw_message = raw_message.encode('utf-8')

        params = {
            'RawMessage.Data': base64.b64encode(raw_message).decode('ascii'),
            'Source': source
        }
        params.update(member_params('Destinations', destinations))
        return self.request('SendRawEmail', params)

    def list_verified_email_addresses(self) -> ListVerifiedEmailAddressesResponse:
        return self.request('ListVerifiedEmailAddresses')

    def verify_email_address(self, address: str) -> VerifyEmailAddressResponse:
        """Ask SES to send a verification email to ``address``."""
        return self.request('VerifyEmailAddress', {'EmailAddress': address})

    def delete_verified_email_address(self, address: str) -> DeleteVerifiedEmailAddressResponse:
        return self.request('DeleteVerifiedEmailAddress', {'EmailAddress': address})

    def get_send_quota(self) -> GetSendQuotaResponse:
        return self.request('GetSendQuota')

    def get_send_statistics(self) -> GetSendStatisticsResponse:
        return self.request('GetSendStatistics')
