"""FakeMailer: records notifications instead of sending them."""

from __future__ import annotations

from dataclasses import dataclass, field

from mergeq.core.errors import NotificationError


@dataclass(frozen=True)
class SentMail:
    to: str
    subject: str
    body: str


@dataclass
class FakeMailer:
    """Mailer that stores messages; set ``fail`` to simulate delivery errors."""

    fail: bool = False
    sent: list[SentMail] = field(default_factory=list)

    def send(self, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationError(f"mail to {to} failed: mailbox unavailable")
        self.sent.append(SentMail(to, subject, body))
