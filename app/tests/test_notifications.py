import logging

from app.core.config import settings
from app.services import notification_service
from app.services.notification_service import EmailNotification


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.sent = []
        self.logged_in = None
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, msg):
        self.sent.append(msg)


def test_send_email_uses_smtp_when_configured(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(notification_service.smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(settings, "SMTP_HOST", "smtp.example.com")
    monkeypatch.setattr(settings, "SMTP_USER", "portal")
    monkeypatch.setattr(settings, "SMTP_PASS", "secret")

    notification_service.send_email("a@example.com", "Hello", "<p>Hi</p>")

    (server,) = FakeSMTP.instances
    assert server.host == "smtp.example.com"
    assert server.logged_in == ("portal", "secret")
    assert server.sent[0]["To"] == "a@example.com"
    assert server.sent[0]["Subject"] == "Hello"


def test_send_email_without_smtp_only_logs(monkeypatch, caplog):
    monkeypatch.setattr(settings, "SMTP_HOST", None)
    monkeypatch.setattr(notification_service.smtplib, "SMTP", None)

    with caplog.at_level(logging.INFO, logger=notification_service.logger.name):
        notification_service.send_email("a@example.com", "Hello", "<p>Hi</p>")

    assert "SMTP not configured" in caplog.text


def test_dispatch_keeps_going_after_a_failure(monkeypatch, caplog):
    delivered = []

    def flaky_send_email(to, subject, html):
        if to == "broken@example.com":
            raise OSError("connection refused")
        delivered.append(to)

    monkeypatch.setattr(notification_service, "send_email", flaky_send_email)

    with caplog.at_level(logging.ERROR, logger=notification_service.logger.name):
        notification_service.dispatch(
            [
                EmailNotification("broken@example.com", "s", "h"),
                EmailNotification("ok@example.com", "s", "h"),
            ]
        )

    assert delivered == ["ok@example.com"]
    assert "Failed to send email to broken@example.com" in caplog.text


def test_welcome_email_escapes_generated_password():
    note = notification_service.student_welcome("s@example.com", "a<b&c")

    assert "<strong>a&lt;b&amp;c</strong>" in note.html
