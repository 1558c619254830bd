"""
Wire models for the Postal send/raw API.

Field names match the JSON keys exactly, so no aliases are needed.
"""

from pydantic import BaseModel, ConfigDict


class ResponseMessage(BaseModel):
    """Per-recipient receipt: the relay's message id and token."""

    model_config = ConfigDict(frozen=True)

    id: int
    token: str


class Response(BaseModel):
    """Receipt for a delivered message."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    messages: dict[str, ResponseMessage] = {}


class RelayEnvelope(BaseModel):
    """Body of a 200 response: `{status, time, data}`."""

    status: str = ""
    time: float = 0.0
    data: Response


class SendRawRequest(BaseModel):
    """Body of `POST /api/v1/send/raw`."""

    model_config = ConfigDict(strict=True)

    mail_from: str
    rcpt_to: list[str]
    data: str               # unpadded base64 of the raw RFC 2822 document
    bounce: bool = False
