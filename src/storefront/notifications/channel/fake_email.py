"""In-memory email adapter, the default until a real provider is installed."""

from uuid import uuid4

from storefront.notifications.channel.email_port import FAILED, SENT, EmailPort

DEFAULT_FAILURE = "Email delivery failed"


class FakeEmailAdapter(EmailPort):
    """Keeps every accepted message in ``sent_emails``.

    Call ``configure(should_succeed=False)`` to make the adapter refuse
    messages, which is how provider outages are simulated.
    """

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.reset()

    def configure(self, should_succeed: bool = True, failure_reason: str = DEFAULT_FAILURE):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict:
        if not self.should_succeed:
            return {"message_id": None, "status": FAILED, "error": self.failure_reason}

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            dict(message_id=message_id, to=to, subject=subject, body=body, html_body=html_body)
        )
        return {"message_id": message_id, "status": SENT}

    def messages_to(self, address: str) -> list[dict]:
        return [message for message in self.sent_emails if message["to"] == address]

    def reset(self):
        self.sent_emails.clear()
        self.configure()
