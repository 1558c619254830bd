"""EZPostal package initialization module.

This package provides a high-level Python interface for sending emails
through the HTTP API of a Postal mail server. Messages are built in memory
with text and HTML bodies, custom headers, inline images and file
attachments, turned into a raw RFC 2822 document and posted to Postal,
which returns a receipt with the message ids.

Modules:
    message (module): The message model and its attachment helpers.
    core (module): Implements the Postal API client.
    mime (module): Builds the raw RFC 2822 document.
    errors (module): Exceptions raised while composing or sending.

Example:
    from ezpostal import APIClient, Message

    client = APIClient("https://postal.domain.com", "api-key")

    msg = Message(from_addr="me@domain.com", to=["you@domain.com"])
    msg.subject = "Hello!"
    msg.html_body = "<p>This is a test email.</p>"
    msg.attach_file("report.pdf")

    receipt = client.send_message(msg)
"""

from .config import PostalConfig
from .core import APIClient, Client
from .errors import (
    AttachmentReadError,
    DecodingError,
    EncodingError,
    PostalError,
    RelayError,
    SerializationError,
    TransportError,
)
from .headers import MIMEHeader
from .message import Attachment, Message
from .models import Response, ResponseMessage

__all__ = [
    "APIClient",
    "Attachment",
    "AttachmentReadError",
    "Client",
    "DecodingError",
    "EncodingError",
    "MIMEHeader",
    "Message",
    "PostalConfig",
    "PostalError",
    "RelayError",
    "Response",
    "ResponseMessage",
    "SerializationError",
    "TransportError",
]
