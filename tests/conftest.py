from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from app.core.mail import get_dispatcher
from app.main import app
from app.schemas.emailSchema import OutboundMessage
from app.services.MailTransport import MailTransportError
from app.services.SubmissionNotifications import NotificationDispatcher

SENDER = "forms@goodshepherd.example.com"
ORGANIZATION = "office@goodshepherd.example.com"


class RecordingTransport:
    """Stub transport that records every send attempt and fails the attempts it is told to."""

    name = "recording"

    def __init__(self, fail_on: Iterable[int] = ()):
        self.sent: list[OutboundMessage] = []
        self.fail_on = set(fail_on)

    async def send_mail(self, message: OutboundMessage) -> dict:
        self.sent.append(message)
        if len(self.sent) in self.fail_on:
            raise MailTransportError("550 mailbox unavailable")
        return {"status": "sent", "to": [message.to]}


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_dispatcher():
    def _make(transport) -> NotificationDispatcher:
        return NotificationDispatcher(
            transport=transport,
            sender_email=SENDER,
            organization_email=ORGANIZATION,
        )
    return _make


@pytest.fixture
def client_for(make_dispatcher):
    def _client(transport) -> TestClient:
        app.dependency_overrides[get_dispatcher] = lambda: make_dispatcher(transport)
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
