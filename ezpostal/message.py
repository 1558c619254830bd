from dataclasses import dataclass, field
from logging import getLogger
from mimetypes import guess_type
from os import PathLike
from os.path import basename
from typing import BinaryIO, Mapping, Iterable

from jinja2 import Template  # type: ignore

from .errors import AttachmentReadError
from .headers import MIMEHeader
from .utils import validate_path, validate_template


HDR_CONTENT_TYPE = "Content-Type"
HDR_CONTENT_TRANSFER_ENCODING = "Content-Transfer-Encoding"
HDR_CONTENT_DISPOSITION = "Content-Disposition"
HDR_CONTENT_ID = "Content-ID"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"
CONTENT_ENC_BASE64 = "base64"

# Compressed files are labelled by their compression, not by what they contain.
COMPRESSION_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
    "br": "application/x-brotli",
}

logger = getLogger(__name__)


@dataclass
class Attachment:
    """A file embedded in a message.

    Set `html_related` to place the attachment next to the HTML body as
    inline content (e.g. an image referenced with `cid:<filename>`) instead
    of offering it as a download.
    """

    filename: str
    header: MIMEHeader = field(default_factory=MIMEHeader)
    content: bytes = b""
    html_related: bool = False

    def __repr__(self) -> str:
        return (
            f"<Attachment filename={self.filename!r} "
            f"size={len(self.content)} html_related={self.html_related}>"
        )


class Message:
    """An outbound email to be delivered through Postal.

    Envelope fields and bodies are plain attributes. Attachments can only be
    added through `attach` and `attach_file`, and keep the order they were
    added in.

    Example:
        msg = Message(from_addr="me@domain.com", to=["you@domain.com"])
        msg.subject = "Monthly report"
        msg.plain_body = "The report is attached."
        msg.attach_file("reports/monthly.pdf")
    """

    def __init__(
        self,
        from_addr: str = "",
        to: list[str] | None = None,
        subject: str = "",
        plain_body: str = "",
        html_body: str = "",
        sender: str = "",
        cc: list[str] | None = None,
        bcc: list[str] | None = None,
        reply_to: list[str] | None = None,
        headers: "MIMEHeader | Mapping[str, Iterable[str]] | None" = None,
    ):
        self.from_addr = from_addr
        self.sender = sender
        self.to = list(to or [])
        self.cc = list(cc or [])
        self.bcc = list(bcc or [])
        self.reply_to = list(reply_to or [])
        self.subject = subject
        self.plain_body = plain_body
        self.html_body = html_body
        self.headers = MIMEHeader(headers)

        self._attachments: list[Attachment] = []

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        """Attachments in the order they were added."""
        return tuple(self._attachments)

    def attach(
        self,
        content: "BinaryIO | bytes",
        filename: str,
        content_type: str = "",
        headers: "MIMEHeader | Mapping[str, Iterable[str]] | None" = None,
    ) -> Attachment:
        """Reads `content` fully and adds it as an attachment.

        Args:
            content (BinaryIO | bytes): Binary stream to read, or the bytes
                themselves.
            filename (str): Name shown to the recipient, also used as the
                Content-ID.
            content_type (str, optional): MIME type. Defaults to
                `application/octet-stream` when empty.
            headers (MIMEHeader | Mapping, optional): Extra headers. Their
                values are added to the defaults, never replacing them.

        Returns:
            Attachment: The stored attachment. Changes to it (such as
            setting `html_related`) apply to the message.

        Raises:
            AttachmentReadError: If the stream cannot be fully read.
            ValueError: If `content` is neither bytes nor readable.
        """
        data = _read_all(content, filename)

        at = Attachment(filename=filename, content=data)
        at.header.set(HDR_CONTENT_TYPE, content_type or CONTENT_TYPE_OCTET_STREAM)
        at.header.set(HDR_CONTENT_DISPOSITION, f'attachment;\r\n filename="{filename}"')
        at.header.set(HDR_CONTENT_ID, f"<{filename}>")
        at.header.set(HDR_CONTENT_TRANSFER_ENCODING, CONTENT_ENC_BASE64)

        if headers:
            at.header.update(headers)

        self._attachments.append(at)
        logger.debug("Attached %s (%d bytes)", filename, len(data))
        return at

    def attach_file(self, path: "str | PathLike[str]") -> Attachment:
        """Attaches the file at `path`.

        The content type is guessed from the file extension and the filename
        is the last component of the path.

        Raises:
            FileNotFoundError: If the file does not exist.
            AttachmentReadError: If the file cannot be read.

        Example:
            attach_file("test/hello.txt")  # filename "hello.txt"
        """
        path = validate_path(path)
        with open(path, "rb") as f:
            return self.attach(f, basename(path), _content_type_of(path))

    def use_template(self, file: "str | PathLike[str]", **variables) -> None:
        """Renders a Jinja2 HTML template into `html_body`.

        Args:
            file (str | PathLike): Path to the HTML template file.
            **variables: Values for the template placeholders.

        Raises:
            ValueError: If the file is not an HTML template.
            FileNotFoundError: If the file does not exist.

        Example:
            use_template("templates/welcome.html", name="John")
        """
        path = validate_template(file)

        with open(path, "r", encoding="utf-8") as f:
            self.html_body = Template(f.read()).render(**variables)

    def __repr__(self) -> str:
        return (
            f"<Message from={self.from_addr!r} to={self.to!r} "
            f"subject={self.subject!r} attachments={len(self._attachments)}>"
        )


def _read_all(content: "BinaryIO | bytes", filename: str) -> bytes:
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    if not hasattr(content, "read"):
        raise ValueError("Attachment content must be bytes or a readable binary stream.")

    try:
        data = content.read()
    except OSError as e:
        raise AttachmentReadError(f"error reading attachment {filename!r}: {e}") from e

    if not isinstance(data, (bytes, bytearray)):
        raise AttachmentReadError(
            f"error reading attachment {filename!r}: stream returned "
            f"{type(data).__name__}, expected bytes"
        )
    return bytes(data)


def _content_type_of(path: str) -> str:
    """Guesses the MIME type from the extension; empty when unknown."""
    content_type, encoding = guess_type(path)
    if encoding:
        return COMPRESSION_TYPES.get(encoding, "")
    return content_type or ""
