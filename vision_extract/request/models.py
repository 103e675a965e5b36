"""Typed wire models for the chat-completions extraction request."""

from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class TextPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    detail: Literal["auto", "low", "high"] | None = None


class ImagePart(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentPart = Annotated[TextPart | ImagePart, Field(discriminator="type")]


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: list[ContentPart]


class ExtractionRequest(BaseModel):
    """Request body sent to the inference service."""

    model_config = ConfigDict(frozen=True)

    model: str
    messages: list[Message]
    temperature: float | None = None
    max_tokens: int | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


@dataclass(frozen=True)
class SerializedRequest:
    """A built request together with its validated JSON body."""

    request: ExtractionRequest
    body: str

    @property
    def image_data(self) -> list[str]:
        """Base64 payloads embedded in the request (used for redaction)."""
        payloads: list[str] = []
        for message in self.request.messages:
            for part in message.content:
                if isinstance(part, ImagePart):
                    _, _, data = part.image_url.url.partition(",")
                    payloads.append(data)
        return payloads
