from enum import Enum
from typing import List

from pydantic import Field

from eduhub.schemas.base import CamelModel


class RecipientType(str, Enum):
    USER = "user"
    CLASS = "class"


class SendMessageRequest(CamelModel):
    recipient_type: RecipientType
    recipient_ids: List[int] = Field(min_length=1)
    subject: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    is_emergency: bool = False


class SendMessageResponse(CamelModel):
    success: bool = True
    message_id: int
    emails_sent: int
    total_recipients: int
