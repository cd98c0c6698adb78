"""Email (SMTP) channel adapter."""

from email.utils import formataddr

from notifyhub.channels import NotificationMessage, SendContext
from notifyhub.exceptions import ProviderError
from notifyhub.mailers.base import SmtpAccount
from notifyhub.schemas.channel import EmailConfig


async def send_email(message: NotificationMessage, config: EmailConfig, ctx: SendContext) -> bool:
    """
    Mail the notification to the account's own address.

    Config expects:
        - smtpService: well-known service name (qq, 163, gmail...) or host[:port]
        - smtpName: login and address, used as both sender and recipient
        - smtpPassword: password or app-specific authorization code
    """
    account = SmtpAccount(
        service=config.smtp_service,
        username=config.smtp_name,
        password=config.smtp_password,
    )
    message_id = await ctx.mailer.send_mail(
        account,
        from_addr=formataddr((ctx.settings.brand_name, config.smtp_name)),
        to=config.smtp_name,
        subject=message.title,
        html=message.content.replace("\n", "<br/>"),
    )
    if not message_id:
        raise ProviderError("Mail server accepted the message without a message id")
    return True
