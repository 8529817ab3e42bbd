"""Read-only payloads broadcast to clients. Nothing here mutates a room."""

from __future__ import annotations

from .models import Room


def public_room_view(room: Room) -> dict:
    with room.lock:
        # Answers, drafts and player keys stay private.
        players = [
            {
                "id": p.id,
                "name": p.name,
                "score": p.score,
                "submitted": p.submitted,
                "isArbiter": room.is_arbiter(p.id),
            }
            for p in room.players.values()
        ]
        return {
            "code": room.code,
            "status": room.status,
            "round": room.round,
            "letter": room.letter,
            "categories": list(room.categories),
            "reviewIndex": room.review_index,
            "endMode": room.end_mode,
            "arbiterPlays": room.arbiter_plays,
            "randomThemes": room.random_themes,
            "arbiterId": room.arbiter_id,
            "players": players,
        }


def round_started_view(room: Room) -> dict:
    with room.lock:
        return {
            "round": room.round,
            "letter": room.letter,
            "categories": list(room.categories),
            "endMode": room.end_mode,
        }


def review_view(room: Room) -> dict:
    with room.lock:
        return {
            "code": room.code,
            "round": room.round,
            "letter": room.letter,
            "categories": list(room.categories),
            "players": [
                {
                    "id": p.id,
                    "name": p.name,
                    "answers": dict(p.answers),
                    "validations": dict(p.validations),
                }
                for p in room.players.values()
            ],
        }


def review_navigate_view(room: Room) -> dict:
    return {"index": room.review_index}


def progress_view(room: Room) -> dict:
    with room.lock:
        eligible = room.eligible_players()
        return {
            "submitted": sum(1 for p in eligible if p.submitted),
            "total": len(eligible),
        }


def leaderboard(room: Room) -> list[dict]:
    with room.lock:
        rows = [{"id": p.id, "name": p.name, "score": p.score} for p in room.players.values()]
    # sorted() is stable: equal scores keep roster order.
    return sorted(rows, key=lambda row: row["score"], reverse=True)
