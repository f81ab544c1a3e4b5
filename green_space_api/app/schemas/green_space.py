"""
Pydantic models for green space data.

``GreenSpaceBase`` holds the three text fields shared by every shape.
``GreenSpaceCreate`` and ``GreenSpaceUpdate`` are request payloads;
``GreenSpace`` is the stored record and the response body.  Creation
returns a tagged ``CreateResult`` so that a rejected payload can be
told apart from a created record.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

MAX_ID = 2**64 - 1


class GreenSpaceBase(BaseModel):
    name: str = Field(..., examples=["Central Park"])
    location: str = Field(..., examples=["NYC"])
    description: str = Field(..., examples=["Big park"])


class GreenSpaceCreate(GreenSpaceBase):
    """Schema for creating a green space."""
    pass


class GreenSpaceUpdate(GreenSpaceBase):
    """Schema for replacing all three fields of a green space."""
    pass


class GreenSpaceLocationUpdate(BaseModel):
    """Schema for changing only the location."""

    location: str = Field(..., examples=["Manhattan, NYC"])


class GreenSpace(BaseModel):
    """A stored green space.

    Field order is significant: it fixes the byte layout produced by
    ``core.codec.encode_green_space``.
    """

    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., ge=0, le=MAX_ID)
    name: str
    location: str
    description: str


class GreenSpaceCount(BaseModel):
    count: int


class Created(BaseModel):
    """Creation succeeded; carries the new record."""

    status: Literal["created"] = "created"
    green_space: GreenSpace


class Rejected(BaseModel):
    """Creation was refused; nothing was stored and no id was used."""

    status: Literal["rejected"] = "rejected"
    reason: str


CreateResult = Annotated[Union[Created, Rejected], Field(discriminator="status")]
