"""Provider response shapes.

The relay reads reply text out of provider responses whose exact layout
is not under our control. Each layout it knows is one variant of the
ProviderReply tagged union; extraction.classify_response() picks the
first variant that matches.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..config import NO_TEXT_REPLY


class TopLevelText(BaseModel):
    """Text exposed directly on the response (response.text)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["top_level_text"] = "top_level_text"
    text: str


class NestedText(BaseModel):
    """Text exposed on a wrapped response (response.response.text)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["nested_text"] = "nested_text"
    text: str


class CandidatePart(BaseModel):
    """Text of the first part of the first candidate's content."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["candidate_part"] = "candidate_part"
    text: str


class EmptyReply(BaseModel):
    """No known accessor yielded any text.

    Happens when the provider blocks a prompt or returns no candidates.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"
    raw: str = Field(default="", description="Printable dump of the raw response, for logs")

    @property
    def text(self) -> str:
        return NO_TEXT_REPLY


ProviderReply = Annotated[
    TopLevelText | NestedText | CandidatePart | EmptyReply,
    Field(discriminator="kind"),
]
