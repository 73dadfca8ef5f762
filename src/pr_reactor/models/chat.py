"""Normalized Slack message events."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from pr_reactor.models.tracking import ChatLocation


class MessageCreated(BaseModel):
    """A new message was posted."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["created"] = "created"
    location: ChatLocation
    text: str
    event_ts: str


class MessageChanged(BaseModel):
    """An existing message was edited."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["changed"] = "changed"
    location: ChatLocation
    previous_text: str
    text: str
    event_ts: str


class MessageDeleted(BaseModel):
    """An existing message was deleted."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["deleted"] = "deleted"
    location: ChatLocation
    previous_text: str
    event_ts: str


ChatEvent = Annotated[
    Union[MessageCreated, MessageChanged, MessageDeleted],
    Field(discriminator="kind"),
]
