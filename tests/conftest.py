import datetime
from typing import Callable
from urllib.parse import parse_qsl

import pytest
import requests

from aws_ses import SESClient

ACCESS_KEY = "AKIDEXAMPLE"
SECRET_KEY = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
SIGNING_TIME = datetime.datetime(2010, 12, 1, tzinfo=datetime.timezone.utc)
SES_NS = "http://ses.amazonaws.com/doc/2010-12-01/"


def make_response(status_code: int, body: str) -> requests.Response:
    """Build a requests.Response carrying ``body``."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.url = "https://email.us-east-1.amazonaws.com:443/"
    return response


def form_params(body: str) -> dict:
    """Decode a form-encoded body into a dict."""
    return dict(parse_qsl(body, keep_blank_values=True))


@pytest.fixture
def response_factory() -> Callable[[int, str], requests.Response]:
    return make_response


@pytest.fixture
def client() -> SESClient:
    return SESClient(access_key_id=ACCESS_KEY, secret_access_key=SECRET_KEY)
