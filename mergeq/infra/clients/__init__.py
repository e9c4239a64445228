"""Clients for external CLIs.

- beads_client: IssueStore backed by bd
- mail_client: Mailer backed by gt mail
"""

from mergeq.infra.clients.beads_client import BeadsClient
from mergeq.infra.clients.mail_client import MailClient

__all__ = ["BeadsClient", "MailClient"]
