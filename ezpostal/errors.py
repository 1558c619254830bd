"""Exceptions raised while composing and delivering messages.

Every error keeps its underlying cause chained (`raise ... from exc`).
A missing attachment file raises the built-in `FileNotFoundError`.
"""


class PostalError(Exception):
    """Base class for all ezpostal errors."""


class AttachmentReadError(PostalError, OSError):
    """The attachment content could not be fully read from its stream."""


class EncodingError(PostalError):
    """The message could not be converted to a raw RFC 2822 document."""


class SerializationError(PostalError):
    """The JSON request body could not be built."""


class TransportError(PostalError):
    """The HTTP exchange with the relay failed (network, TLS, timeout)."""


class RelayError(PostalError):
    """The relay answered with a status other than 200.

    Attributes:
        status_code (int): HTTP status returned by the relay.
        body (str): Raw response body, reported verbatim.
    """

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"error sending message to postal, status code: {status_code}, error: {body}"
        )


class DecodingError(PostalError):
    """A 200 response body was not the JSON document the relay should send."""
