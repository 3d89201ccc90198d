"""
Data contracts for the feed resolution pipeline.

These Pydantic models describe the inputs accepted by the pipeline,
the intermediate candidates it builds, and the records it hands to
the output layer. All of them are immutable once constructed.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

GameIdentifier = Annotated[int, Field(gt=0, description="Steam App ID")]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Inputs -------------------------------------------------------------------


class AppIdInput(_FrozenModel):
    """An App ID given directly, as a number or as typed on the command line."""

    kind: Literal["app_id"] = "app_id"
    value: int | str

    @property
    def raw(self) -> str:
        return str(self.value)


class StoreUrlInput(_FrozenModel):
    """A Steam Store page URL, e.g. https://store.steampowered.com/app/440/."""

    kind: Literal["store_url"] = "store_url"
    value: str

    @property
    def raw(self) -> str:
        return self.value


class UserProfileInput(_FrozenModel):
    """A Steam Community profile handle, SteamID64 or profile URL."""

    kind: Literal["user_profile"] = "user_profile"
    value: str

    @property
    def raw(self) -> str:
        return self.value


InputSpec = Annotated[
    AppIdInput | StoreUrlInput | UserProfileInput,
    Field(discriminator="kind"),
]


class ProfileReference(_FrozenModel):
    """
    Canonical reference to a Steam Community profile.

    Steam serves vanity profiles under /id/<handle> and numeric
    profiles under /profiles/<steamid64>.
    """

    kind: Literal["id", "profiles"]
    value: str = Field(..., min_length=1)

    @property
    def path(self) -> str:
        """Profile path segment, e.g. 'id/examplehandle'."""
        return f"{self.kind}/{self.value}"

    def __str__(self) -> str:
        return self.path


# --- Profile listing ----------------------------------------------------------


class ProfileGame(_FrozenModel):
    """One entry of a profile's public games list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    app_id: GameIdentifier = Field(..., alias="appid")
    name: str | None = None
    friendly_url: str | None = Field(default=None, alias="friendlyURL")

    @field_validator("friendly_url", mode="before")
    @classmethod
    def drop_non_string_friendly_url(cls, v: Any) -> str | None:
        """Steam sends false or the App ID when a game has no friendly name."""
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None


# --- Candidates and outcomes --------------------------------------------------


class CandidateFeed(_FrozenModel):
    """A feed URL that has not necessarily been confirmed to exist."""

    game_id: GameIdentifier
    url: str
    display_name: str | None = None
    alternate_url: str | None = Field(
        default=None,
        description="Feed URL built from the game's friendly name, tried when url fails",
    )


class NotAttempted(_FrozenModel):
    status: Literal["not_attempted"] = "not_attempted"


class Verified(_FrozenModel):
    status: Literal["verified"] = "verified"
    url: str = Field(..., description="URL that served the feed")
    title: str | None = Field(default=None, description="Feed title read from the document")


class Failed(_FrozenModel):
    status: Literal["failed"] = "failed"
    reason: str


VerificationOutcome = Annotated[
    NotAttempted | Verified | Failed,
    Field(discriminator="status"),
]


class ResultRecord(_FrozenModel):
    """Final output unit: a candidate feed and how its verification went."""

    candidate: CandidateFeed
    outcome: VerificationOutcome = Field(default_factory=NotAttempted)

    @property
    def url(self) -> str:
        """URL to subscribe to (the verified one when verification picked an alternate)."""
        match self.outcome:
            case Verified(url=url):
                return url
            case NotAttempted() | Failed():
                return self.candidate.url

    @property
    def title(self) -> str | None:
        match self.outcome:
            case Verified(title=title) if title:
                return title
            case _:
                return self.candidate.display_name

    @property
    def is_verified(self) -> bool:
        return isinstance(self.outcome, Verified)
