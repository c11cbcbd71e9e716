import smtplib

from src.attendease.attendease.notifications.email import SMTPConfig, SMTPEmailSender
from src.attendease.attendease.notifications.service import NotificationService
from src.attendease.attendease.notifications.templates import movement_alert_email, wrap_in_template

from tests.fakes import InMemoryNotifications, RecordingDispatcher, RecordingEmailSender, ist


class RaisingSender:
    def send(self, *, to, subject, html):
        raise RuntimeError("connection reset")


def test_notify_and_email_are_queued_not_run():
    notifications = InMemoryNotifications()
    email = RecordingEmailSender()
    dispatcher = RecordingDispatcher()
    service = NotificationService(notifications, email, dispatcher, clock=lambda: ist(2025, 1, 6, 10, 0))

    service.notify(3, "Hello", "World", "/dashboard")
    service.send_email("a@example.com", "Subject", "<p>x</p>")

    assert dispatcher.names() == ["notification", "email"]
    assert notifications.rows == [] and email.sent == []

    dispatcher.run_all()

    assert notifications.rows[0].title == "Hello"
    assert notifications.rows[0].created_at == ist(2025, 1, 6, 10, 0)
    assert email.sent == [("a@example.com", "Subject", "<p>x</p>")]


def test_deliver_emails_counts_successes():
    service = NotificationService(InMemoryNotifications(), RecordingEmailSender(succeed=False), RecordingDispatcher())

    assert service.deliver_emails(["a@example.com", "b@example.com"], "S", "<p/>") == 0


def test_sender_exceptions_are_contained(caplog):
    service = NotificationService(InMemoryNotifications(), RaisingSender(), RecordingDispatcher())

    assert service.deliver_emails(["a@example.com"], "S", "<p/>") == 0
    assert "Email sender raised" in caplog.text


def test_smtp_sender_without_host_skips():
    sender = SMTPEmailSender(SMTPConfig(host=""))

    assert sender.send(to="a@example.com", subject="S", html="<p/>") is False


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout):
        self.host, self.port, self.timeout = host, port, timeout
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user))

    def send_message(self, msg):
        self.calls.append(("send", msg["To"], msg["Subject"]))


def test_smtp_sender_uses_tls_login_and_timeout(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    config = SMTPConfig.from_mapping({"host": "smtp.example.com", "port": "2525", "user": "bot", "password": "pw"})

    ok = SMTPEmailSender(config, app_name="AttendEase").send(to="a@example.com", subject="Hi", html="<p>x</p>")

    assert ok is True
    smtp = FakeSMTP.instances[0]
    assert (smtp.host, smtp.port, smtp.timeout) == ("smtp.example.com", 2525, 10.0)
    assert smtp.calls == ["starttls", ("login", "bot"), ("send", "a@example.com", "Hi")]


def test_smtp_failure_returns_false(monkeypatch):
    class Refused(FakeSMTP):
        def send_message(self, msg):
            raise smtplib.SMTPRecipientsRefused({})

    monkeypatch.setattr(smtplib, "SMTP", Refused)

    assert SMTPEmailSender(SMTPConfig(host="smtp.example.com")).send(to="x", subject="S", html="") is False


def test_templates_escape_user_content():
    html = movement_alert_email(
        employee_name="<script>",
        employee_email="e@example.com",
        heading="Employee Movement Alert",
        check_in_time="09:00 AM",
        check_in_address="A & B",
        current_address="C",
        distance="1.2km",
        map_url="https://www.google.com/maps/dir/1,2/3,4",
    )

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "A &amp; B" in html
    assert "<h1" in wrap_in_template("AttendEase", "T", html)
