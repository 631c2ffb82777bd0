from __future__ import annotations

import asyncio
import html
import logging
from typing import Iterable

from pydantic import BaseModel
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from eduhub.config import settings
from eduhub.models import ClassEnrollment, Message, MessageRecipient, ParentProfile, StudentParent, StudentProfile, User
from eduhub.schemas.auth import Identity
from eduhub.schemas.message import RecipientType, SendMessageRequest
from eduhub.services.mailer import Mailer

log = logging.getLogger(__name__)


class DispatchResult(BaseModel):
    sent: int
    total: int
    failed: list[str] = []


def _dedupe(emails: Iterable[str]) -> list[str]:
    # Exact-string match; addresses are not case-folded
    return list(dict.fromkeys(emails))


def _class_emails(session: Session, class_id: int) -> list[str]:
    emails: list[str] = []
    students = (
        session.query(StudentProfile.id, User.email)
        .join(ClassEnrollment, ClassEnrollment.student_id == StudentProfile.id)
        .join(User, User.id == StudentProfile.user_id)
        .filter(ClassEnrollment.class_id == class_id)
        .order_by(User.last_name, User.first_name)
        .all()
    )
    for student_id, email in students:
        emails.append(email)
        parents = (
            session.query(User.email)
            .join(ParentProfile, ParentProfile.user_id == User.id)
            .join(StudentParent, StudentParent.parent_id == ParentProfile.id)
            .filter(StudentParent.student_id == student_id)
            .order_by(StudentParent.is_primary.desc(), User.last_name)
            .all()
        )
        emails.extend(parent_email for (parent_email,) in parents)
    return emails


def resolve_recipients(session: Session, recipient_type: RecipientType, ids: Iterable[int]) -> list[str]:
    """
    Turn a recipient selector into the unique email addresses it reaches.
    A class reaches its enrolled students and each of their linked parents.
    """
    ids = list(ids)
    if recipient_type == RecipientType.USER:
        users = {u.id: u.email for u in session.query(User).filter(User.id.in_(ids)).all()}
        return _dedupe(users[i] for i in ids if i in users)

    emails: list[str] = []
    for class_id in ids:
        emails.extend(_class_emails(session, class_id))
    return _dedupe(emails)


def render_email(subject: str, body: str, sender_name: str) -> str:
    body_html = html.escape(body).replace("\n", "<br>")
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f'<h2 style="color: #0284c7;">{html.escape(subject)}</h2>'
        f'<div style="margin: 20px 0; line-height: 1.6;">{body_html}</div>'
        '<hr style="border: none; border-top: 1px solid #e2e8f0; margin: 20px 0;">'
        f'<p style="color: #64748b; font-size: 12px;">'
        f"This message was sent from {html.escape(settings.APP_NAME)} by {html.escape(sender_name)}</p>"
        "</div>"
    )


async def dispatch(mailer: Mailer, addresses: list[str], subject: str, body_html: str, text: str) -> DispatchResult:
    """Send to every address in parallel and wait for all of them. No retries."""

    async def send_one(address: str) -> bool:
        try:
            return bool(await run_in_threadpool(mailer.send, address, subject, body_html, text))
        except Exception:
            log.exception("Mailer raised while sending to %s", address)
            return False

    outcomes = await asyncio.gather(*(send_one(a) for a in addresses))
    failed = [address for address, ok in zip(addresses, outcomes) if not ok]
    if failed:
        log.warning("%d of %d email(s) failed: %s", len(failed), len(addresses), ", ".join(failed))
    return DispatchResult(sent=len(addresses) - len(failed), total=len(addresses), failed=failed)


def store_message(session: Session, sender: Identity, data: SendMessageRequest) -> Message:
    """Persist the message with one recipient row per selector id."""
    message = Message(
        sender_id=sender.id,
        subject=data.subject,
        body=data.body,
        is_email=True,
        is_emergency=data.is_emergency,
        recipients=[
            MessageRecipient(recipient_type=data.recipient_type.value, recipient_id=recipient_id)
            for recipient_id in data.recipient_ids
        ],
    )
    session.add(message)
    session.commit()
    session.refresh(message)
    return message


async def send_message(session: Session, mailer: Mailer, sender: Identity, data: SendMessageRequest) -> tuple[Message, DispatchResult]:
    addresses = await run_in_threadpool(resolve_recipients, session, data.recipient_type, data.recipient_ids)
    message = await run_in_threadpool(store_message, session, sender, data)

    subject = f"[URGENT] {data.subject}" if data.is_emergency else data.subject
    result = await dispatch(mailer, addresses, subject, render_email(data.subject, data.body, sender.name), data.body)
    log.info("Message %s sent to %d/%d address(es)", message.id, result.sent, result.total)
    return message, result
