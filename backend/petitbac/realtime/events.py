"""Inbound Socket.IO requests, one model per event name, and outbound event names."""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..game.categories import clean_categories
from ..game.models import EndMode
from ..game.registry import normalize_code


class InvalidPayload(ValueError):
    def __init__(self, event: str, reason: str):
        super().__init__(f"{event}: {reason}")
        self.event = event
        self.reason = reason


# Outbound
CREATED = "created"
JOINED = "joined"
ERROR_MSG = "errorMsg"
LOBBY_UPDATE = "lobbyUpdate"
ROUND_STARTED = "roundStarted"
PROGRESS = "progress"
REVIEW_PHASE = "reviewPhase"
REVIEW_NAVIGATE = "reviewNavigate"
VALIDATION_UPDATED = "validationUpdated"
ROUND_ENDED = "roundEnded"

MSG_INVALID_CODE = "Code de partie invalide."
MSG_NO_ROOM_CODE = "Impossible de créer une partie pour le moment."


class _Request(BaseModel):
    """Lenient where a default makes sense, strict on room references."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("name", "player_key", check_fields=False, mode="before")
    @classmethod
    def coerce_text_or_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("categories", check_fields=False, mode="before")
    @classmethod
    def coerce_clean_categories(cls, value: Any) -> list[str]:
        return clean_categories(value)


class _RoomRequest(_Request):
    code: str

    @field_validator("code", mode="before")
    @classmethod
    def coerce_normalize_code(cls, value: Any) -> str:
        code = normalize_code(value)
        if not code:
            raise ValueError("missing code")
        return code


class CreateGame(_Request):
    name: str = ""
    categories: list[str] = Field(default_factory=list)
    # "hostPlays" is what older clients send.
    arbiter_plays: bool = Field(
        True, validation_alias=AliasChoices("arbiterPlays", "hostPlays", "arbiter_plays")
    )
    end_mode: EndMode = Field("all", alias="endMode")
    random_themes: bool = Field(False, alias="randomThemes")
    player_key: str = Field("", alias="playerKey")

    @field_validator("arbiter_plays", mode="before")
    @classmethod
    def coerce_plays(cls, value: Any) -> bool:
        return True if value is None else bool(value)

    @field_validator("random_themes", mode="before")
    @classmethod
    def coerce_random(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("end_mode", mode="before")
    @classmethod
    def coerce_end_mode(cls, value: Any) -> str:
        return "first" if value == "first" else "all"


class JoinGame(_RoomRequest):
    name: str = ""
    player_key: str = Field("", alias="playerKey")


class RenamePlayer(_RoomRequest):
    name: str = ""


class LeaveGame(_RoomRequest):
    pass


class StartRound(_RoomRequest):
    letter: Optional[str] = None
    categories: list[str] = Field(default_factory=list)

    @field_validator("letter", mode="before")
    @classmethod
    def coerce_letter(cls, value: Any) -> str | None:
        return value if isinstance(value, str) and value.strip() else None


class Draft(_RoomRequest):
    answers: dict = Field(default_factory=dict)

    @field_validator("answers", mode="before")
    @classmethod
    def coerce_answers(cls, value: Any) -> dict:
        return value if isinstance(value, dict) else {}


class SubmitAnswers(_RoomRequest):
    answers: Optional[dict] = None

    @field_validator("answers", mode="before")
    @classmethod
    def coerce_answers(cls, value: Any) -> dict | None:
        return value if isinstance(value, dict) else None


class ForceReview(_RoomRequest):
    pass


class SetReviewIndex(_RoomRequest):
    index: Any = 0


class ToggleValidation(_RoomRequest):
    player_id: str = Field(alias="playerId", min_length=1)
    category: str = Field(min_length=1)


class EndRound(_RoomRequest):
    pass


Request = Union[
    CreateGame,
    JoinGame,
    RenamePlayer,
    LeaveGame,
    StartRound,
    Draft,
    SubmitAnswers,
    ForceReview,
    SetReviewIndex,
    ToggleValidation,
    EndRound,
]

REQUEST_TYPES: dict[str, type[_Request]] = {
    "createGame": CreateGame,
    "joinGame": JoinGame,
    "renamePlayer": RenamePlayer,
    "leaveGame": LeaveGame,
    "startRound": StartRound,
    "draft": Draft,
    "submitAnswers": SubmitAnswers,
    "forceReview": ForceReview,
    "setReviewIndex": SetReviewIndex,
    "toggleValidation": ToggleValidation,
    "endRound": EndRound,
}


def parse_request(event: str, data: Any) -> Request:
    request_type = REQUEST_TYPES.get(event)
    if request_type is None:
        raise InvalidPayload(event, "unknown event")
    try:
        return request_type.model_validate(data if isinstance(data, dict) else {})
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "payload"
        raise InvalidPayload(event, f"{field}: {first.get('msg')}") from exc
