import pytest

from conftest import ORGANIZATION, RecordingTransport

VALID_PAYLOADS = {
    "/api/appointments": {"name": "Ama", "number": "0201234567", "email": "ama@example.com", "message": "Checkup"},
    "/api/contact": {"name": "Bo", "number": "0241112222", "email": "bo@example.com", "message": "Opening hours?"},
    "/api/questions": {"name": "Ada", "email": "ada@example.com", "question": "When open?"},
}

REQUIRED_KEYS = {
    "/api/appointments": ["name", "number", "email"],
    "/api/contact": ["name", "number", "email"],
    "/api/questions": ["name", "email", "question"],
}


def test_question_submission_sends_notice_and_confirmation(client_for) -> None:
    transport = RecordingTransport()
    client = client_for(transport)

    response = client.post(
        "/api/questions",
        json={"name": "Ada", "email": "ada@example.com", "question": "When open?"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "message": "Question submitted successfully! A confirmation has been sent to your email."
    }
    assert len(transport.sent) == 2
    notice, confirmation = transport.sent
    assert notice.to == ORGANIZATION
    assert notice.subject == "New Question from FAQ Page"
    assert confirmation.to == "ada@example.com"
    assert confirmation.subject == "Question Submission Confirmation"


@pytest.mark.parametrize("path", sorted(VALID_PAYLOADS))
def test_valid_submissions_return_200(client_for, path) -> None:
    transport = RecordingTransport()

    response = client_for(transport).post(path, json=VALID_PAYLOADS[path])

    assert response.status_code == 200
    assert response.json()["message"]
    assert len(transport.sent) == 2


@pytest.mark.parametrize(
    ("path", "missing_key"),
    [(path, key) for path, keys in sorted(REQUIRED_KEYS.items()) for key in keys],
)
def test_missing_required_field_returns_400_without_sending(client_for, path, missing_key) -> None:
    transport = RecordingTransport()
    payload = {key: value for key, value in VALID_PAYLOADS[path].items() if key != missing_key}

    response = client_for(transport).post(path, json=payload)

    assert response.status_code == 400
    assert response.json()["message"].startswith("Missing required fields")
    assert transport.sent == []


def test_contact_with_only_name_is_rejected(client_for) -> None:
    transport = RecordingTransport()

    response = client_for(transport).post("/api/contact", json={"name": "Bo"})

    assert response.status_code == 400
    assert response.json() == {"message": "Missing required fields: name, number, or email."}
    assert transport.sent == []


def test_contact_message_is_optional(client_for) -> None:
    transport = RecordingTransport()
    payload = {"name": "Bo", "number": "0241112222", "email": "bo@example.com"}

    response = client_for(transport).post("/api/contact", json=payload)

    assert response.status_code == 200
    assert transport.sent[0].body.endswith("Message: ")


def test_appointment_accepts_hyphenated_email_key(client_for) -> None:
    transport = RecordingTransport()
    payload = {"name": "Kofi", "number": "0201234567", "e-mail": "kofi@example.com"}

    response = client_for(transport).post("/api/appointments", json=payload)

    assert response.status_code == 200
    assert transport.sent[1].to == "kofi@example.com"
    assert transport.sent[1].subject == "Appointment Confirmation - Good Shepherd Hospital"


def test_invalid_email_returns_400(client_for) -> None:
    transport = RecordingTransport()
    payload = {"name": "Ada", "email": "ada-at-example", "question": "When open?"}

    response = client_for(transport).post("/api/questions", json=payload)

    assert response.status_code == 400
    assert response.json() == {"message": "Please provide a valid email address."}
    assert transport.sent == []


def test_malformed_json_body_returns_400(client_for) -> None:
    transport = RecordingTransport()

    response = client_for(transport).post(
        "/api/appointments",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert transport.sent == []


def test_notice_failure_returns_500_after_one_attempt(client_for) -> None:
    transport = RecordingTransport(fail_on=[1])

    response = client_for(transport).post("/api/appointments", json=VALID_PAYLOADS["/api/appointments"])

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to book appointment. Please try again later."}
    assert len(transport.sent) == 1


def test_confirmation_failure_returns_500_after_two_attempts(client_for) -> None:
    transport = RecordingTransport(fail_on=[2])

    response = client_for(transport).post("/api/contact", json=VALID_PAYLOADS["/api/contact"])

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to send message. Please try again later."}
    assert len(transport.sent) == 2
    assert "550" not in response.text


def test_unexpected_dispatch_error_returns_500(client_for, monkeypatch) -> None:
    from app.services.SubmissionNotifications import NotificationDispatcher

    async def explode(self, submission):
        raise RuntimeError("template bug")

    monkeypatch.setattr(NotificationDispatcher, "dispatch", explode)

    response = client_for(RecordingTransport()).post("/api/questions", json=VALID_PAYLOADS["/api/questions"])

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to submit question. Please try again later."}


def test_health_check_reports_transport() -> None:
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert response.json()["mail_transport"] == "smtp"


@pytest.mark.parametrize("email", ["Ada@Example.COM", "ada@hospital.local"])
def test_confirmation_goes_to_the_submitted_address(client_for, email) -> None:
    transport = RecordingTransport()
    payload = {"name": "Ada", "email": f" {email} ", "question": "When open?"}

    response = client_for(transport).post("/api/questions", json=payload)

    assert response.status_code == 200
    assert transport.sent[0].reply_to == email
    assert transport.sent[1].to == email


def test_health_check_is_healthy_when_mail_is_configured(monkeypatch) -> None:
    from fastapi.testclient import TestClient
    from app.core.config import settings
    from app.main import app

    monkeypatch.setattr(settings, "EMAIL_USER", "forms@goodshepherd.example.com")
    monkeypatch.setattr(settings, "RECEIVER_EMAIL", "office@goodshepherd.example.com")

    with TestClient(app) as client:
        response = client.get("/")

    assert response.json()["status"] == "healthy"


def test_health_check_is_degraded_without_mail_addresses(monkeypatch) -> None:
    from fastapi.testclient import TestClient
    from app.core.config import settings
    from app.main import app

    monkeypatch.setattr(settings, "RECEIVER_EMAIL", "")

    with TestClient(app) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
