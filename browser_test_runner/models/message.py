"""Wire messages sent by the client execution agent over the WebSocket."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from browser_test_runner.exceptions import ProtocolError

DONE_FRAME = "DONE"

MessageType = Literal["SUITE", "SUCCEEDED", "FAILED"]


class ProtocolMessage(BaseModel):
    """A single suite or test event reported by the browser."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: MessageType = Field(..., description="Kind of event")
    name: str = Field(..., description="Suite or test name")
    result: str = Field(..., description="Stringified subject or failure detail")


def parse_message(frame: str) -> ProtocolMessage:
    """Parse a text frame into a protocol message.

    Raises:
        ProtocolError: If the frame is not a valid JSON protocol message

    """
    try:
        return ProtocolMessage.model_validate_json(frame)
    except ValidationError as e:
        raise ProtocolError(f"Malformed protocol message {frame!r}: {e}") from e
