"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  core to I/O libraries.
- The same models decode the API payload and feed the renderers.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.state import QueryState


class Character(BaseModel):
    """A record of the character collection.

    The core never interprets these fields; anything beyond the required ones
    is kept as-is (`extra="allow"`) so renderers can use it.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int = Field(..., description="Identifier assigned by the API.")
    name: str = Field(..., description="Character name.")
    status: str = Field(..., description="Alive, Dead or unknown.")
    species: str = Field(..., description="Species of the character.")
    gender: str = Field(..., description="Gender reported by the API.")


class ApiInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    count: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)
    next: str | None = None
    prev: str | None = None


class ApiResponse(BaseModel):
    """Raw success body of `GET /character`."""

    model_config = ConfigDict(extra="ignore")

    info: ApiInfo
    results: list[Character] = Field(default_factory=list)


class FetchRequest(BaseModel):
    """Parameters of exactly one remote query."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1, description="Page number, starting at 1.")
    name: str = Field(default="", description="Name substring; empty means no filter.")


class CharacterPage(BaseModel):
    """Decoded success payload handed to the core."""

    model_config = ConfigDict(frozen=True)

    results: tuple[Character, ...] = Field(default_factory=tuple)
    total_count: int = Field(default=0, ge=0)
    page_count: int = Field(default=0, ge=0)

    @classmethod
    def from_api(cls, response: ApiResponse) -> "CharacterPage":
        return cls(
            results=tuple(response.results),
            total_count=response.info.count,
            page_count=response.info.pages,
        )


class FailureKind(str, Enum):
    """Typed failures of a fetch."""

    NOT_FOUND = "not_found"
    OTHER = "other"


class FetchSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    payload: CharacterPage


class FetchFailure(BaseModel):
    """A terminal failure of one fetch.

    `NOT_FOUND` is how the API says "no records match"; it is not an
    operational error. Everything else is `OTHER`.
    """

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    detail: str | None = None

    @classmethod
    def not_found(cls) -> "FetchFailure":
        return cls(kind=FailureKind.NOT_FOUND)

    @classmethod
    def other(cls, detail: str | None = None) -> "FetchFailure":
        return cls(kind=FailureKind.OTHER, detail=detail)


FetchOutcome = Union[FetchSuccess, FetchFailure]


class QuerySnapshot(BaseModel):
    """Immutable view of the state store for renderers and exporters."""

    model_config = ConfigDict(frozen=True)

    state: QueryState = Field(..., description="Presentation state.")
    characters: tuple[Character, ...] = Field(default_factory=tuple)
    total_count: int = Field(default=0, ge=0)
    page_count: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1, description="Page the results belong to.")
    search: str = Field(default="", description="Search term the results belong to.")
