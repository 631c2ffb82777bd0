from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eduhub.dependencies import get_db, get_mailer, require_permission
from eduhub.permissions import Permission
from eduhub.schemas.auth import Identity
from eduhub.schemas.message import SendMessageRequest, SendMessageResponse
from eduhub.services.mailer import Mailer
from eduhub.services.messaging import send_message

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", name="messages.send")
async def send(
    data: SendMessageRequest,
    sender: Identity = Depends(require_permission(Permission.MESSAGES_SEND)),
    session: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Stores the message and emails everyone it reaches.
    Individual delivery failures are reported in the counts, not as an error.
    """
    message, result = await send_message(session, mailer, sender, data)
    return SendMessageResponse(
        message_id=message.id,
        emails_sent=result.sent,
        total_recipients=result.total,
    )
