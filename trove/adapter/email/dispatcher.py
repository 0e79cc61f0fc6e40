"""Invitation notice dispatchers."""

from email.message import EmailMessage
from html import escape

import aiosmtplib
import logfire

from trove.adapter.error import NotificationError
from trove.config import EmailSettings
from trove.domain.service.notification import InvitationNotice, NotificationDispatcher


def render_invitation_email(notice: InvitationNotice, from_address: str) -> EmailMessage:
    """Build the plain-text and HTML invitation email."""
    message = EmailMessage()
    message["From"] = from_address
    message["To"] = notice.to_email.root
    message["Subject"] = f"Invitation to join {notice.community_name}"

    expires = notice.expires_at.strftime("%Y-%m-%d %H:%M UTC")
    note = f"\n{notice.message}\n" if notice.message else ""
    message.set_content(
        f"{notice.inviter_name} invited you to join the community "
        f'"{notice.community_name}" on Trove.\n'
        f"{note}\n"
        f"Open this link to accept the invitation:\n{notice.accept_url}\n\n"
        f"The invitation expires on {expires}.\n"
    )
    community, inviter = escape(notice.community_name), escape(notice.inviter_name)
    message.add_alternative(
        f"<h2>You're invited to join {community}!</h2>"
        f"<p>{inviter} invited you to join the community "
        f"&quot;{community}&quot; on Trove.</p>"
        + (f"<p>{escape(notice.message)}</p>" if notice.message else "")
        + f'<p><a href="{notice.accept_url}">Accept Invitation</a></p>'
        f"<p>This invitation expires on {expires}.</p>",
        subtype="html",
    )
    return message


class SmtpInvitationDispatcher(NotificationDispatcher):
    """Sends invitation emails over SMTP.

    With ``email.enabled`` off (the default outside production) the notice
    is only logged, without its link.
    """

    def __init__(self, email_settings: EmailSettings) -> None:
        self.email_settings = email_settings

    async def dispatch(self, notice: InvitationNotice) -> None:
        """Send one invitation email.

        Raises:
            NotificationError: If the SMTP exchange fails
        """
        with logfire.span(
            "email.dispatch_invitation", community_name=notice.community_name
        ):
            if not self.email_settings.enabled:
                logfire.info(
                    "Email disabled, invitation notice not sent",
                    community_name=notice.community_name,
                )
                return

            message = render_invitation_email(notice, self.email_settings.from_address)
            try:
                await aiosmtplib.send(
                    message,
                    hostname=self.email_settings.host,
                    port=self.email_settings.port,
                    username=self.email_settings.username,
                    password=self.email_settings.password,
                    start_tls=self.email_settings.start_tls,
                    timeout=self.email_settings.timeout_seconds,
                )
            except aiosmtplib.SMTPException as e:
                raise NotificationError(f"SMTP delivery failed: {e}") from e
            except OSError as e:
                raise NotificationError(f"SMTP server unreachable: {e}") from e

            logfire.info("Invitation email sent", community_name=notice.community_name)


class RecordingInvitationDispatcher(NotificationDispatcher):
    """Keeps notices in memory instead of sending them.

    Used by the test container; set ``fail_with`` to simulate an outage.
    """

    def __init__(self) -> None:
        self.sent: list[InvitationNotice] = []
        self.fail_with: Exception | None = None

    async def dispatch(self, notice: InvitationNotice) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(notice)

    def last_token(self) -> str:
        """Token at the end of the most recent accept link."""
        if not self.sent:
            raise LookupError("No invitation notice has been dispatched")
        return self.sent[-1].accept_url.rsplit("/", 1)[-1]
