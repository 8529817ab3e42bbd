from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Literal


RoomStatus = Literal["lobby", "playing", "review"]
EndMode = Literal["first", "all"]


@dataclass
class Player:
    id: str
    name: str
    score: int = 0
    submitted: bool = False
    answers: dict[str, str] = field(default_factory=dict)
    drafts: dict[str, str] = field(default_factory=dict)
    validations: dict[str, bool] = field(default_factory=dict)
    joined_at_ms: int = 0
    player_key: str = ""

    def valid_count(self) -> int:
        return sum(1 for ok in self.validations.values() if ok)


@dataclass
class Room:
    code: str
    arbiter_id: str
    status: RoomStatus = "lobby"
    round: int = 0
    letter: str | None = None
    categories: list[str] = field(default_factory=list)
    review_index: int = 0
    end_mode: EndMode = "all"
    arbiter_plays: bool = True
    random_themes: bool = False
    # Limits seeded from the app config when the room is created.
    name_max_length: int = 20
    answer_max_length: int = 60
    themes_count: int = 6
    players: dict[str, Player] = field(default_factory=dict)
    player_key_index: dict[str, str] = field(default_factory=dict)
    created_at_ms: int = 0
    lock: RLock = field(default_factory=RLock, repr=False, compare=False)

    def is_arbiter(self, socket_id: str) -> bool:
        return socket_id == self.arbiter_id

    def is_eligible(self, player_id: str) -> bool:
        """Whether the player counts toward "everyone has submitted"."""
        return self.arbiter_plays or player_id != self.arbiter_id

    def eligible_players(self) -> list[Player]:
        return [p for p in self.players.values() if self.is_eligible(p.id)]
