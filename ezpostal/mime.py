"""Conversion of a `Message` into a raw RFC 2822 document.

The part layout depends on what the message carries:

    text only                 text/plain
    html only                 text/html
    text + html               multipart/alternative
    html + related parts      multipart/related (html first, then the parts)
    any regular attachment    multipart/mixed (body first, then attachments)

Related attachments are treated as regular ones when there is no HTML body.
"""

from base64 import encodebytes
from email.charset import Charset, QP
from email.message import Message as MIMEMessage
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.policy import compat32
from email.utils import formatdate, make_msgid, parseaddr
from logging import getLogger

from .message import Attachment, Message


# Lines end with CRLF as required on the wire.
SMTP_POLICY = compat32.clone(linesep="\r\n")

UTF8_QP = Charset("utf-8")
UTF8_QP.body_encoding = QP

# Headers whose parameters may need RFC 2231 encoding.
PARAMETER_HEADERS = ("content-type", "content-disposition")

# Headers that describe the MIME structure; custom headers never replace them.
STRUCTURAL_HEADERS = ("content-type", "mime-version", "content-transfer-encoding")

logger = getLogger(__name__)


def to_bytes(msg: Message) -> bytes:
    """Returns `msg` as a raw RFC 2822 document."""
    return to_mime(msg).as_bytes(policy=SMTP_POLICY)


def to_mime(msg: Message) -> MIMEMessage:
    """Builds the `email` object tree for `msg`, headers included."""
    inline = bool(msg.html_body)
    related = [at for at in msg.attachments if inline and at.html_related]
    regular = [at for at in msg.attachments if not (inline and at.html_related)]

    html_part = None
    if msg.html_body:
        html_part = MIMEText(msg.html_body, "html", UTF8_QP)
        if related:
            wrapper = MIMEMultipart("related")
            wrapper.attach(html_part)
            for at in related:
                wrapper.attach(_attachment_part(at))
            html_part = wrapper

    text_part = MIMEText(msg.plain_body, "plain", UTF8_QP) if msg.plain_body else None

    if text_part is not None and html_part is not None:
        body = MIMEMultipart("alternative")
        body.attach(text_part)
        body.attach(html_part)
    else:
        body = text_part or html_part

    if regular:
        root = MIMEMultipart("mixed")
        if body is not None:
            root.attach(body)
        for at in regular:
            root.attach(_attachment_part(at))
    elif body is not None:
        root = body
    else:
        root = MIMEText("", "plain", UTF8_QP)

    _write_headers(root, msg)
    return root


def _attachment_part(at: Attachment) -> MIMEMessage:
    """Creates the part for `at`, carrying its headers as stored.

    ASCII values are written unchanged, folds included. Non-ASCII parameters
    of Content-Type and Content-Disposition are RFC 2231 encoded so the type
    stays readable; any other non-ASCII value is written as raw UTF-8.
    """
    part = MIMEBase("application", "octet-stream")
    del part["Content-Type"]
    del part["MIME-Version"]

    for name, value in at.header.items():
        if value.isascii():
            part[name] = value
        elif name.lower() in PARAMETER_HEADERS:
            _add_parameter_header(part, name, value)
        else:
            part[name] = value.encode("utf-8").decode("ascii", "surrogateescape")

    part.set_payload(encodebytes(at.content).decode("ascii"))
    return part


def _add_parameter_header(part: MIMEMessage, name: str, value: str) -> None:
    scratch = MIMEMessage()
    scratch[name] = value
    (main, _), *params = scratch.get_params(header=name)

    encoded = {}
    for key, param in params:
        encoded[key] = param if param.isascii() else ("utf-8", "", param)
    part.add_header(name, main, **encoded)


def _write_headers(root: MIMEMessage, msg: Message) -> None:
    headers = [("From", msg.from_addr)]
    if msg.sender:
        headers.append(("Sender", msg.sender))
    if msg.to:
        headers.append(("To", ", ".join(msg.to)))
    if msg.cc:
        headers.append(("Cc", ", ".join(msg.cc)))
    if msg.reply_to:
        headers.append(("Reply-To", ", ".join(msg.reply_to)))
    headers.append(("Subject", msg.subject))
    headers.append(("Date", formatdate(localtime=True)))
    headers.append(("Message-ID", make_msgid(domain=_domain_of(msg.from_addr))))

    # MIME-Version and Content-Type go after the envelope headers.
    structural = root.items()
    for name, _ in structural:
        del root[name]
    headers.extend(structural)

    # A custom header replaces a generated envelope header of the same name.
    ignored = [name for name in msg.headers if name.lower() in STRUCTURAL_HEADERS]
    if ignored:
        logger.warning("Ignoring custom MIME structure header(s): %s", ", ".join(ignored))

    headers = [
        (name, value)
        for name, value in headers
        if name.lower() in STRUCTURAL_HEADERS or name not in msg.headers
    ]
    headers.extend(
        (name, value)
        for name, value in msg.headers.items()
        if name.lower() not in STRUCTURAL_HEADERS
    )

    for name, value in headers:
        root[name] = value


def _domain_of(address: str) -> str | None:
    _, addr = parseaddr(address)
    domain = addr.rpartition("@")[2]
    return domain or None
