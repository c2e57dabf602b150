import pytest
import requests

from entra_lookup.config import AppCredentials, Config
from entra_lookup.engine.models import AccessToken

ALICE_BODY = (
    '{"value":[{"displayName":"Alice Smith",'
    '"userPrincipalName":"alice@example.com"}]}'
)


class FakeSession:
    """Stands in for requests.Session; records every request."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


class FakeMsalApp:
    """Stands in for msal.ConfidentialClientApplication."""

    instances = []

    def __init__(self, client_id, authority=None, client_credential=None, result=None):
        self.client_id = client_id
        self.authority = authority
        self.client_credential = client_credential
        self.result = result
        self.scopes = None
        FakeMsalApp.instances.append(self)

    def acquire_token_for_client(self, scopes):
        self.scopes = scopes
        return self.result


def build_response(status_code=200, body="", reason="OK"):
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    return resp


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def credentials():
    return AppCredentials(
        client_id="11111111-2222-3333-4444-555555555555",
        tenant_id="contoso.onmicrosoft.com",
        client_secret="s3cr3t-value",
    )


@pytest.fixture
def config(credentials):
    return Config(credentials=credentials, nickname="alice")


@pytest.fixture
def token():
    return AccessToken("eyJ0eXAiOiJKV1QiLCJhbGciOiJSUzI1NiJ9.fake")


@pytest.fixture
def fake_msal(monkeypatch):
    """Patch msal so that acquire_token_for_client returns ``fake_msal.result``."""

    class Controller:
        result = {"access_token": "token-abc", "token_type": "Bearer", "expires_in": 3599}
        error = None

    FakeMsalApp.instances = []

    def factory(client_id, authority=None, client_credential=None):
        if Controller.error is not None:
            raise Controller.error
        return FakeMsalApp(
            client_id,
            authority=authority,
            client_credential=client_credential,
            result=Controller.result,
        )

    monkeypatch.setattr("msal.ConfidentialClientApplication", factory)
    Controller.instances = FakeMsalApp.instances
    return Controller


@pytest.fixture
def alice_body():
    return ALICE_BODY
