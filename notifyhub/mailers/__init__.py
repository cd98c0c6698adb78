"""Outgoing mail abstraction layer."""

from notifyhub.mailers.base import Mailer, SmtpAccount
from notifyhub.mailers.smtp import SmtpMailer, resolve_server

__all__ = [
    "Mailer",
    "SmtpAccount",
    "SmtpMailer",
    "resolve_server",
]
