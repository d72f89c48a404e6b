"""
E-mail notifications for purchase events.

Mail goes out after the surrounding transaction commits. When SMTP is not
configured the notification is skipped; send failures are logged and never
propagate into the business operation.
"""

import smtplib
from typing import Iterable

import structlog
from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction
from django.template.loader import render_to_string

from apps.accounts.models import Account
from apps.purchases.models import Purchase, PurchaseStatus

logger = structlog.get_logger(__name__)


def _send(*, recipient: str, subject: str, template: str, context: dict) -> None:
    if not settings.EMAIL_NOTIFICATIONS_ENABLED:
        logger.debug('email_skipped', template=template, reason='smtp_not_configured')
        return

    context = {**context, 'marketplace_name': settings.MARKETPLACE_NAME}
    body = render_to_string(f'purchases/emails/{template}.txt', context)

    try:
        send_mail(
            subject=f'{subject} - {settings.MARKETPLACE_NAME}',
            message=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient],
        )
    except (smtplib.SMTPException, OSError) as e:
        logger.warning('email_failed', template=template, recipient=recipient, error=str(e))
        return

    logger.info('email_sent', template=template, recipient=recipient)


def _after_commit(**kwargs) -> None:
    transaction.on_commit(lambda: _send(**kwargs))


def notify_purchase_created(purchase: Purchase) -> None:
    _after_commit(
        recipient=purchase.team.email,
        subject='Purchase request received',
        template='purchase_created',
        context={'team': purchase.team, 'purchase': purchase},
    )


def notify_batch_created(team: Account, purchases: Iterable[Purchase]) -> None:
    purchases = list(purchases)
    if not purchases:
        return

    _after_commit(
        recipient=team.email,
        subject='Batch purchase request received',
        template='batch_created',
        context={'team': team, 'purchases': purchases},
    )


def notify_purchase_reviewed(purchase: Purchase) -> None:
    if purchase.status == PurchaseStatus.CONFIRMED:
        subject = 'Purchase confirmed'
    else:
        subject = 'Purchase cancelled'

    _after_commit(
        recipient=purchase.team.email,
        subject=subject,
        template='purchase_reviewed',
        context={
            'team': purchase.team,
            'purchase': purchase,
            'confirmed': purchase.status == PurchaseStatus.CONFIRMED,
        },
    )


def notify_purchase_returned(purchase: Purchase) -> None:
    _after_commit(
        recipient=purchase.team.email,
        subject='Return recorded',
        template='purchase_returned',
        context={'team': purchase.team, 'purchase': purchase},
    )


def notify_batch_reviewed(
    *,
    team: Account,
    confirmed: list,
    adjusted: list,
    cancelled: list
) -> None:
    """One summary per team after a batch review."""
    if not (confirmed or adjusted or cancelled):
        return

    # Batch review commits per item, so there is no open transaction here
    _send(
        recipient=team.email,
        subject='Your order has been processed',
        template='batch_reviewed',
        context={
            'team': team,
            'confirmed': confirmed,
            'adjusted': adjusted,
            'cancelled': cancelled,
        },
    )
