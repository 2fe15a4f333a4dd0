"""Module containing the RequestSigner for SES."""
import base64
import datetime
import hashlib
import hmac
from email.utils import format_datetime
from typing import Dict, NamedTuple, Optional
from urllib.parse import quote_plus

API_VERSION = '2010-12-01'
SIGNATURE_VERSION = '2'
SIGNATURE_METHOD = 'HmacSHA256'
USER_AGENT = 'aws-ses-python'
CONTENT_TYPE = 'application/x-www-form-urlencoded'


class SignedRequest(NamedTuple):
    """Form body and headers of a signed request."""

    body: str
    headers: Dict[str, str]


def sign(secret_access_key: str, message: str, urlencode: bool = True) -> str:
    """Sign a string with the secret access key.

    Takes the HMAC-SHA256 of the message, base64 encodes the raw digest and,
    when asked, url encodes the result so it can be sent as a query value.

    :param secret_access_key: str, secret used as the HMAC key.
    :param message: str, string to sign.
    :param urlencode: bool, percent-encode the signature.
    :return: str, the signed and encoded string.
    """
    digest = hmac.new(
        secret_access_key.encode('utf-8'),
        message.encode('utf-8'),
        hashlib.sha256
    ).digest()
    signature = base64.b64encode(digest).decode('ascii').replace('\n', '')

    if urlencode:
        return quote_plus(signature, safe='')
    return signature


def authorization_header(access_key_id: str, algorithm: str, signature: str) -> str:
    """Format the AWS3-HTTPS authorization header value."""
    return (
        f"AWS3-HTTPS AWSAccessKeyId={access_key_id}, "
        f"Algorithm={algorithm}, Signature={signature}"
    )


def iso8601(timestamp: datetime.datetime) -> str:
    """Format a UTC instant as ``2010-12-01T00:00:00Z``."""
    return timestamp.astimezone(datetime.timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def httpdate(timestamp: datetime.datetime) -> str:
    """Format a UTC instant as ``Wed, 01 Dec 2010 00:00:00 GMT``."""
    return format_datetime(timestamp.astimezone(datetime.timezone.utc), usegmt=True)


def canonical_query(params: Dict[str, str]) -> str:
    """Serialize parameters sorted by key, each key and value form-encoded."""
    return '&'.join(
        f"{quote_plus(key, safe='')}={quote_plus(value, safe='')}"
        for key, value in sorted(params.items())
    )


class RequestSigner:
    """Handles SES request signing using AWS3-HTTPS authorization."""

    def __init__(self, access_key: str, secret_key: str) -> None:
        """Initialize the request signer.

        :param access_key: str, AWS access key.
        :param secret_key: str, AWS secret key.
        return: None, initialize the request signer.
        """
        self.access_key = access_key
        self.secret_key = secret_key

    def authorization(self, date: str) -> str:
        """Build the ``X-Amzn-Authorization`` value for an HTTP date."""
        signature = sign(self.secret_key, date, urlencode=False)
        return authorization_header(self.access_key, SIGNATURE_METHOD, signature)

    def sign_request(
        self,
        action: str,
        params: Optional[Dict[str, Optional[str]]] = None,
        timestamp: Optional[datetime.datetime] = None
    ) -> SignedRequest:
        """Create the signed form body and headers for an action.

        Only the HTTP date is signed; the parameter order does not affect the
        signature but is kept sorted so the body is reproducible.

        :param action: str, SES action name.
        :param params: Optional[Dict[str, Optional[str]]], action parameters;
            entries that are None or empty strings are dropped.
        :param timestamp: Optional[datetime.datetime], instant to sign,
            defaults to now.
        :return: SignedRequest, body and headers.
        """
        if timestamp is None:
            timestamp = datetime.datetime.now(datetime.timezone.utc)

        query = {
            key: str(value)
            for key, value in (params or {}).items()
            if value is not None and value != ''
        }
        query.update({
            'Action': action,
            'SignatureVersion': SIGNATURE_VERSION,
            'SignatureMethod': SIGNATURE_METHOD,
            'AWSAccessKeyId': self.access_key,
            'Version': API_VERSION,
            'Timestamp': iso8601(timestamp)
        })

        date = httpdate(timestamp)
        headers = {
            'Content-Type': CONTENT_TYPE,
            'X-Amzn-Authorization': self.authorization(date),
            'Date': date,
            'User-Agent': USER_AGENT
        }
        return SignedRequest(canonical_query(query), headers)
