"""Pytest fixtures for the contact relay: fake clock, fake Zoho endpoints, isolated contexts."""

from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qs

import httpx
import pytest

from agrinova_contact.api.dependencies import build_context
from agrinova_contact.utils.config_loader import ContactConfig, ContactSettings

START = 1_700_000_000.0


class FakeClock:
    def __init__(self, now: float = START):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


Reply = Union[Tuple[int, Any], Exception]


class FakeZoho:
    """Stands in for accounts.zoho.com and mail.zoho.com behind an httpx.MockTransport."""

    def __init__(self):
        self.token_requests: List[httpx.Request] = []
        self.send_requests: List[httpx.Request] = []
        self.token_reply: Reply = (200, {"access_token": "tok-1", "expires_in": 3600})
        self.send_replies: List[Reply] = []

    def _build(self, reply: Reply, request: httpx.Request) -> httpx.Response:
        if isinstance(reply, Exception):
            raise reply
        status, body = reply
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body or "")

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth/v2/token"):
            self.token_requests.append(request)
            return self._build(self.token_reply, request)
        if request.url.path.endswith("/messages"):
            self.send_requests.append(request)
            if self.send_replies:
                return self._build(self.send_replies.pop(0), request)
            message_id = f"msg-{len(self.send_requests)}"
            return httpx.Response(200, json={"status": {"code": 200, "description": "success"}, "data": {"messageId": message_id}})
        return httpx.Response(404, json={"error": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def token_form(self, index: int = 0) -> Dict[str, str]:
        parsed = parse_qs(self.token_requests[index].content.decode())
        return {k: v[0] for k, v in parsed.items()}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_zoho():
    return FakeZoho()


@pytest.fixture
def settings():
    return ContactSettings(
        allowed_origin="https://agrinovaai.com",
        client_id="client-id",
        client_secret="client-secret",
        refresh_token="refresh-token",
        account_id="998877",
        from_email="noreply@agrinovalabs.site",
    )


@pytest.fixture
def config():
    return ContactConfig()


@pytest.fixture
def context(settings, config, clock, fake_zoho):
    return build_context(settings=settings, config=config, clock=clock, transport=fake_zoho.transport)


def submission(**overrides: Optional[str]) -> Dict[str, Any]:
    body = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "phone": "",
        "interest": "",
        "message": "Hello, I am interested in your platform.",
    }
    body.update(overrides)
    return body


@pytest.fixture
def make_submission():
    return submission
