from abc import ABC, abstractmethod
from base64 import b64encode
from logging import getLogger

import requests
from pydantic import ValidationError

from .config import PostalConfig
from .errors import DecodingError, EncodingError, RelayError, SerializationError, TransportError
from .message import Message
from .mime import to_bytes
from .models import RelayEnvelope, Response, SendRawRequest
from .utils import validate_api_config


SEND_RAW_PATH = "/api/v1/send/raw"
HDR_API_KEY = "X-Server-API-Key"

logger = getLogger(__name__)


class Client(ABC):
    """Anything that can deliver a `Message` to Postal."""

    @abstractmethod
    def send_message(self, msg: Message) -> Response:
        """Delivers `msg` and returns the relay's receipt."""


class APIClient(Client):
    """Delivers messages through the Postal HTTP API.

    Each call to `send_message` is one POST to `/api/v1/send/raw`; nothing is
    retried, batched or cached, and no state is kept between calls. The client
    is as thread-safe as the session it is given.

    Example:
        client = APIClient("https://postal.domain.com", "api-key")
        msg = Message(from_addr="me@domain.com", to=["you@domain.com"])
        msg.subject = "Hello!"
        msg.plain_body = "This is a test email."
        receipt = client.send_message(msg)
        print(receipt.message_id)
    """

    def __init__(
        self,
        base_uri: str,
        token: str,
        session: requests.Session | None = None,
        timeout: float | tuple[float, float] | None = None,
    ):
        """Initializes the client.

        Args:
            base_uri (str): Address of the Postal server. A trailing slash is
                ignored.
            token (str): Server API key sent in `X-Server-API-Key`.
            session (requests.Session, optional): HTTP session used for every
                request. A new one is created when omitted.
            timeout (float | tuple, optional): Passed to each request as-is.
                No timeout is applied when omitted.

        Raises:
            ValueError: If the address or token is missing or malformed.
        """
        validate_api_config(base_uri, token)

        self.base_uri = base_uri
        self.token = token
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: PostalConfig, session: requests.Session | None = None) -> "APIClient":
        return cls(config.base_uri, config.token, session=session, timeout=config.timeout)

    @property
    def endpoint(self) -> str:
        return self.base_uri.rstrip("/") + SEND_RAW_PATH

    def send_message(self, msg: Message) -> Response:
        """Builds the raw document for `msg` and sends it to Postal.

        Args:
            msg (Message): The message to deliver. It is not modified or kept.

        Returns:
            Response: Message id plus a message id/token per recipient.

        Raises:
            EncodingError: If the message cannot be turned into an RFC 2822
                document. No request is made.
            SerializationError: If the JSON request cannot be built.
            TransportError: If the HTTP exchange fails.
            RelayError: If Postal answers with a status other than 200.
            DecodingError: If the 200 response is not the expected JSON.
        """
        try:
            raw = to_bytes(msg)
        except Exception as e:
            raise EncodingError(f"error converting email to rfc 2822 message: {e}") from e

        try:
            payload = SendRawRequest(
                mail_from=msg.from_addr,
                rcpt_to=list(msg.to),
                data=b64encode(raw).decode("ascii").rstrip("="),
                bounce=False,
            ).model_dump_json()
        except (ValidationError, TypeError, ValueError) as e:
            raise SerializationError(f"error marshalling request to json: {e}") from e

        body = self._post(payload)
        envelope = self._decode(body)

        logger.info(
            "Postal accepted message %s for %d recipient(s)",
            envelope.data.message_id,
            len(envelope.data.messages),
        )
        return envelope.data

    def _post(self, payload: str) -> str:
        """Sends `payload` and returns the body of a 200 response."""
        headers = {HDR_API_KEY: self.token, "Content-Type": "application/json"}
        logger.debug("POST %s (%d bytes)", self.endpoint, len(payload))

        try:
            resp = self.session.post(
                self.endpoint,
                data=payload.encode("utf-8"),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"error sending request to postal: {e}") from e

        try:
            status_code = resp.status_code
            body = resp.content.decode("utf-8", errors="replace")
        except requests.RequestException as e:
            raise TransportError(f"error reading body from postal response: {e}") from e
        finally:
            resp.close()

        if status_code != 200:
            logger.warning("Postal rejected message: %s - %s", status_code, body)
            raise RelayError(status_code, body)
        return body

    def _decode(self, body: str) -> RelayEnvelope:
        try:
            return RelayEnvelope.model_validate_json(body)
        except ValidationError as e:
            raise DecodingError(f"error unmarshalling json from postal response: {e}") from e
