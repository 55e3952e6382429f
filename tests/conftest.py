"""Pytest fixtures for the WeChat APP pay client tests."""

import datetime

import pytest
import requests
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

import wechat_app_pay.client as client_module
from wechat_app_pay import WeChatAppClient
from wechat_app_pay.transport import dict_to_xml

APP_ID = "wxd930ea5d5a258f4f"
MCH_ID = "10000100"
KEY = "192006250b4c09247ec02edce69f6a2d"
CERT_SERIAL = 0x1234ABCD


class FakeResponse:
    def __init__(self, content, status_code=200):
        self.content = content.encode("utf-8") if isinstance(content, str) else content
        self.status_code = status_code

    @property
    def text(self):
        return self.content.decode("utf-8")

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error", response=self)


@pytest.fixture(scope="session")
def cert_pair():
    """Throw-away RSA key and self-signed certificate, both PEM bytes."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, MCH_ID)])
    now = datetime.datetime.now(datetime.timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(CERT_SERIAL)
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=365))
        .sign(key, hashes.SHA256())
    )
    key_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return key_pem, cert.public_bytes(serialization.Encoding.PEM)


@pytest.fixture
def wx_client():
    return WeChatAppClient(APP_ID, MCH_ID, KEY, spbill_create_ip="10.0.0.1")


@pytest.fixture
def wx_cert_client(cert_pair):
    key_pem, cert_pem = cert_pair
    client = WeChatAppClient(APP_ID, MCH_ID, KEY, private_key=key_pem, public_key=cert_pem,
                             spbill_create_ip="10.0.0.1")
    yield client
    client.https_client.close()


@pytest.fixture
def reset_default_client(monkeypatch):
    monkeypatch.setattr(client_module, "_default_wechat_app_client", None)


@pytest.fixture
def fake_post(monkeypatch):
    """Replace requests.post; queue XML replies with ``fake_post.reply``."""

    class _FakePost:
        def __init__(self):
            self.calls = []
            self.responses = []

        def reply(self, data, status_code=200):
            content = data if isinstance(data, (str, bytes)) else dict_to_xml(data)
            self.responses.append(FakeResponse(content, status_code))

        def __call__(self, url, data=None, **kwargs):
            self.calls.append({"url": url, "data": data, **kwargs})
            return self.responses.pop(0)

    fake = _FakePost()
    monkeypatch.setattr("wechat_app_pay.transport.requests.post", fake)
    return fake
