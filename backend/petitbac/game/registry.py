from __future__ import annotations

import logging
import time
from threading import RLock
from typing import Callable

from ..config import Config
from .codes import new_room_code
from .models import EndMode, Room

logger = logging.getLogger(__name__)

CREATE_ROOM_CODE_ATTEMPTS = 24


def now_ms() -> int:
    return int(time.time() * 1000)


class RoomCodeExhausted(RuntimeError):
    """No free room code could be found."""


def normalize_code(code: object) -> str:
    if not isinstance(code, str):
        return ""
    return code.strip().upper()


class RoomRegistry:
    """In-memory map of live rooms, keyed by code.

    One registry is built per application and handed to the socket handlers,
    so tests get their own isolated instance.
    """

    def __init__(self, code_factory: Callable[[], str] | None = None):
        self._code_factory = code_factory or new_room_code
        self._lock = RLock()
        self._rooms: dict[str, Room] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return normalize_code(code) in self._rooms

    def create_room(
        self,
        arbiter_id: str,
        *,
        categories: list[str],
        end_mode: EndMode = "all",
        arbiter_plays: bool = True,
        random_themes: bool = False,
        name_max_length: int | None = None,
        answer_max_length: int | None = None,
        themes_count: int | None = None,
    ) -> Room:
        with self._lock:
            for _ in range(CREATE_ROOM_CODE_ATTEMPTS):
                code = normalize_code(self._code_factory())
                if code and code not in self._rooms:
                    break
                logger.debug("Room code collision on %r, retrying", code)
            else:
                raise RoomCodeExhausted("Unable to allocate a room code right now.")

            room = Room(
                code=code,
                arbiter_id=arbiter_id,
                categories=list(categories),
                end_mode=end_mode,
                arbiter_plays=arbiter_plays,
                random_themes=random_themes,
                name_max_length=name_max_length or Config.NAME_MAX_LENGTH,
                answer_max_length=answer_max_length or Config.ANSWER_MAX_LENGTH,
                themes_count=themes_count or Config.RANDOM_THEMES_COUNT,
                created_at_ms=now_ms(),
            )
            self._rooms[code] = room

        logger.info(
            "Room %s created (endMode=%s, arbiterPlays=%s, randomThemes=%s)",
            code,
            end_mode,
            arbiter_plays,
            random_themes,
        )
        return room

    def get_room(self, code: object) -> Room | None:
        with self._lock:
            return self._rooms.get(normalize_code(code))

    def remove_room(self, code: object) -> bool:
        with self._lock:
            removed = self._rooms.pop(normalize_code(code), None)
        if removed is not None:
            logger.info("Room %s removed", removed.code)
        return removed is not None

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())

    def rooms_for(self, socket_id: str) -> list[Room]:
        with self._lock:
            return [r for r in self._rooms.values() if socket_id in r.players]
