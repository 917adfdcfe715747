"""
Log-only EmailSender for local runs.

Nothing leaves the process: the recipient, subject and plain-text body
are written to the log at INFO, so codes and links can be copied from
the server output.
"""

import logging

from src.domain.ports import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """EmailSender that writes each message to the log instead of delivering it."""

    def send(self, message: EmailMessage) -> None:
        logger.info(
            "[EMAIL] To: %s Subject: %s Body: %s",
            message.to,
            message.subject,
            message.text,
        )
