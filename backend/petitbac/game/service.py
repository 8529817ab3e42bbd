from __future__ import annotations

import logging
import unicodedata
from typing import Any

from ..config import Config
from .categories import CategorySource, clean_categories
from .codes import normalize_letter, random_letter
from .models import Player, Room
from .registry import RoomRegistry, now_ms

logger = logging.getLogger(__name__)


DEFAULT_PLAYER_NAME = "Joueur"
DEFAULT_ARBITER_NAME = "Maître"
PLAYER_KEY_MAX_LENGTH = 64


def clean_name(raw: object, default: str = DEFAULT_PLAYER_NAME, max_length: int | None = None) -> str:
    if not isinstance(raw, str):
        return default
    # Drop control characters; they break the roster layout on clients.
    name = "".join(ch for ch in raw if unicodedata.category(ch)[0] != "C").strip()
    name = name[: max_length or Config.NAME_MAX_LENGTH].strip()
    return name or default


def clean_answers(room: Room, raw: object) -> dict[str, str]:
    """Keep string answers for the room's active categories, trimmed and bounded."""
    if not isinstance(raw, dict):
        return {}
    allowed = set(room.categories)
    out: dict[str, str] = {}
    for category, text in raw.items():
        if not isinstance(category, str) or (allowed and category not in allowed):
            continue
        if not isinstance(text, str):
            continue
        value = text.strip()[: room.answer_max_length]
        if value:
            out[category] = value
    return out


def _as_int(raw: Any, default: int = 0) -> int:
    if isinstance(raw, bool):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return default


# --- roster -----------------------------------------------------------------


def join(room: Room, socket_id: str, name: object, player_key: object = "") -> tuple[Player, str | None]:
    """Register ``socket_id`` in the room, or refresh its existing record.

    Returns ``(player, replaced_socket_id)``. The second item is set when a
    known ``player_key`` moved an older connection's record onto this one.
    """
    with room.lock:
        pk = player_key.strip()[:PLAYER_KEY_MAX_LENGTH] if isinstance(player_key, str) else ""
        replaced: str | None = None

        if pk and socket_id not in room.players:
            old_sid = room.player_key_index.get(pk)
            old_player = room.players.get(old_sid) if old_sid else None
            if old_sid and old_player is not None:
                # Same human, new connection: keep score, answers and role.
                del room.players[old_sid]
                old_player.id = socket_id
                room.players[socket_id] = old_player
                if room.arbiter_id == old_sid:
                    room.arbiter_id = socket_id
                replaced = old_sid
                logger.info("Room %s: player %s resumed on %s", room.code, old_sid, socket_id)

        player = room.players.get(socket_id)
        if player is None:
            default = DEFAULT_ARBITER_NAME if room.is_arbiter(socket_id) else DEFAULT_PLAYER_NAME
            player = Player(
                id=socket_id,
                name=clean_name(name, default, room.name_max_length),
                joined_at_ms=now_ms(),
                player_key=pk,
            )
            room.players[socket_id] = player
            logger.info("Room %s: %s joined as %r", room.code, socket_id, player.name)
        else:
            if isinstance(name, str) and name.strip():
                player.name = clean_name(name, player.name, room.name_max_length)
            if pk:
                player.player_key = pk

        if pk:
            room.player_key_index[pk] = socket_id

        return player, replaced


def rename(room: Room, socket_id: str, name: object) -> bool:
    with room.lock:
        player = room.players.get(socket_id)
        if player is None or not isinstance(name, str) or not name.strip():
            return False
        player.name = clean_name(name, player.name, room.name_max_length)
        return True


def remove_player(room: Room, socket_id: str) -> bool:
    """Drop the connection's record and hand the arbiter role on if needed."""
    with room.lock:
        player = room.players.pop(socket_id, None)
        if player is None:
            return False

        if player.player_key and room.player_key_index.get(player.player_key) == socket_id:
            del room.player_key_index[player.player_key]

        if room.arbiter_id == socket_id and room.players:
            # min() keeps the first of equal timestamps, i.e. roster order.
            successor = min(room.players.values(), key=lambda p: p.joined_at_ms)
            room.arbiter_id = successor.id
            logger.info("Room %s: arbiter role passed to %s", room.code, successor.id)
        return True


def disconnect(registry: RoomRegistry, room: Room, socket_id: str) -> bool:
    """Remove the player; an emptied room is dropped from the registry."""
    with room.lock:
        removed = remove_player(room, socket_id)
        if removed and not room.players:
            registry.remove_room(room.code)
        return removed


# --- round lifecycle --------------------------------------------------------


def start_round(
    room: Room,
    socket_id: str,
    letter: object = None,
    categories: object = None,
    *,
    category_source: CategorySource,
) -> bool:
    with room.lock:
        if not room.is_arbiter(socket_id) or room.status != "lobby":
            logger.debug(
                "Room %s: start_round refused for %s in %s", room.code, socket_id, room.status
            )
            return False

        room.status = "playing"
        room.round += 1
        room.letter = normalize_letter(letter) or random_letter()

        override = clean_categories(categories)
        if room.random_themes:
            room.categories = category_source.sample(room.themes_count)
        elif override:
            room.categories = override
        elif not room.categories:
            room.categories = category_source.default_list()
        room.review_index = 0

        for p in room.players.values():
            p.submitted = False
            p.answers = {}
            p.validations = {}
            p.drafts = {}

        logger.info("Room %s: round %d started with letter %s", room.code, room.round, room.letter)
        return True


def save_draft(room: Room, socket_id: str, answers: object) -> bool:
    with room.lock:
        player = room.players.get(socket_id)
        if player is None:
            return False
        player.drafts = clean_answers(room, answers)
        return True


def _enter_review(room: Room) -> None:
    for p in room.eligible_players():
        if not p.submitted:
            p.submitted = True
            p.answers = dict(p.drafts)
    room.status = "review"
    room.review_index = 0
    logger.info("Room %s: round %d in review", room.code, room.round)


def submit_answers(room: Room, socket_id: str, answers: object = None) -> tuple[bool, bool]:
    """Returns ``(accepted, advanced_to_review)``."""
    with room.lock:
        player = room.players.get(socket_id)
        if player is None or room.status != "playing" or not room.is_eligible(socket_id):
            return False, False

        player.answers = clean_answers(room, answers) or dict(player.drafts)
        player.submitted = True

        everyone = all(p.submitted for p in room.eligible_players())
        if room.end_mode == "first" or everyone:
            _enter_review(room)
            return True, True
        return True, False


def force_review(room: Room, socket_id: str) -> bool:
    with room.lock:
        if not room.is_arbiter(socket_id) or room.status == "lobby":
            logger.debug("Room %s: force_review refused for %s", room.code, socket_id)
            return False
        _enter_review(room)
        return True


def set_review_index(room: Room, socket_id: str, index: object) -> int | None:
    with room.lock:
        if not room.is_arbiter(socket_id):
            return None
        last = max(len(room.categories) - 1, 0)
        room.review_index = max(0, min(_as_int(index), last))
        return room.review_index


def toggle_validation(room: Room, socket_id: str, target_id: object, category: object) -> bool | None:
    """Flip one mark; returns the new value, or None when refused."""
    with room.lock:
        if not room.is_arbiter(socket_id) or room.status != "review":
            return None
        target = room.players.get(target_id) if isinstance(target_id, str) else None
        if target is None or not isinstance(category, str) or category not in room.categories:
            return None
        target.validations[category] = not target.validations.get(category, False)
        return target.validations[category]


def end_round(room: Room, socket_id: str) -> bool:
    with room.lock:
        if not room.is_arbiter(socket_id) or room.status != "review":
            return False
        for p in room.players.values():
            p.score += p.valid_count()
        room.status = "lobby"
        logger.info("Room %s: round %d scored", room.code, room.round)
        return True
