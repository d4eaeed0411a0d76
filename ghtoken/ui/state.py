"""View states for the authorization page."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _State(BaseModel):
    model_config = ConfigDict(frozen=True)


class Idle(_State):
    """No code in the URL; the page offers the login action."""

    status: Literal["idle"] = "idle"


class Loading(_State):
    """A code was found and the exchange is in flight."""

    status: Literal["loading"] = "loading"
    code: str


class Success(_State):
    status: Literal["success"] = "success"
    access_token: str


class Failed(_State):
    status: Literal["failed"] = "failed"
    message: str


ViewState = Annotated[
    Union[Idle, Loading, Success, Failed], Field(discriminator="status")
]


__all__ = [
    "Failed",
    "Idle",
    "Loading",
    "Success",
    "ViewState",
]
