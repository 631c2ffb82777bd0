from eduhub.extensions import db
from eduhub.utils import utcnow


class Message(db.Model):
    __tablename__ = "messages"

    id = db.Column(db.Integer, primary_key=True)
    sender_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    subject = db.Column(db.String(255), nullable=False)
    body = db.Column(db.Text, nullable=False)
    is_email = db.Column(db.Boolean, nullable=False, default=True)
    is_emergency = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    sender = db.relationship("User")
    recipients = db.relationship("MessageRecipient", back_populates="message", cascade="all, delete-orphan")


class MessageRecipient(db.Model):
    """The selector a message was addressed to, not the resolved email list."""

    __tablename__ = "message_recipients"

    id = db.Column(db.Integer, primary_key=True)
    message_id = db.Column(db.Integer, db.ForeignKey("messages.id"), nullable=False, index=True)
    recipient_type = db.Column(db.String(20), nullable=False)  # user|class
    recipient_id = db.Column(db.Integer, nullable=False)

    message = db.relationship("Message", back_populates="recipients")
