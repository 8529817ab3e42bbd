from __future__ import annotations

import logging
from typing import Any

from flask import current_app, request
from flask_socketio import SocketIO, emit, join_room, leave_room

from ..game import service, views
from ..game.categories import CategorySource
from ..game.models import Room
from ..game.registry import RoomCodeExhausted, RoomRegistry
from . import events
from .events import InvalidPayload

logger = logging.getLogger(__name__)


def register_socketio_handlers(
    socketio: SocketIO,
    registry: RoomRegistry,
    category_source: CategorySource,
) -> None:
    def _parse(event: str, data: Any):
        try:
            return events.parse_request(event, data)
        except InvalidPayload as exc:
            logger.debug("Ignoring %s from %s: %s", event, request.sid, exc.reason)
            return None

    def _room_for(req) -> Room | None:
        if req is None:
            return None
        return registry.get_room(req.code)

    def _broadcast_lobby(room: Room) -> None:
        socketio.emit(events.LOBBY_UPDATE, views.public_room_view(room), to=room.code)

    def _broadcast_review(room: Room) -> None:
        socketio.emit(events.REVIEW_PHASE, views.review_view(room), to=room.code)
        socketio.emit(events.REVIEW_NAVIGATE, views.review_navigate_view(room), to=room.code)

    def _replay_phase(room: Room) -> None:
        # Late joiners and reconnects land directly in the current phase.
        if room.status == "playing":
            emit(events.ROUND_STARTED, views.round_started_view(room))
        elif room.status == "review":
            emit(events.REVIEW_PHASE, views.review_view(room))
            emit(events.REVIEW_NAVIGATE, views.review_navigate_view(room))

    def _depart(room: Room, socket_id: str) -> None:
        if not service.disconnect(registry, room, socket_id):
            return
        if room.players:
            _broadcast_lobby(room)

    @socketio.on_error_default
    def on_error(exc):
        logger.exception("Socket.IO handler failed for %s", request.sid)

    @socketio.on("createGame")
    def create_game(data=None):
        req = _parse("createGame", data) or events.CreateGame()
        try:
            room = registry.create_room(
                request.sid,
                categories=req.categories or category_source.default_list(),
                end_mode=req.end_mode,
                arbiter_plays=req.arbiter_plays,
                random_themes=req.random_themes,
                name_max_length=current_app.config.get("NAME_MAX_LENGTH"),
                answer_max_length=current_app.config.get("ANSWER_MAX_LENGTH"),
                themes_count=current_app.config.get("RANDOM_THEMES_COUNT"),
            )
        except RoomCodeExhausted:
            logger.error("Room code space exhausted, refusing createGame from %s", request.sid)
            emit(events.ERROR_MSG, events.MSG_NO_ROOM_CODE)
            return

        service.join(room, request.sid, req.name, req.player_key)
        join_room(room.code)

        _broadcast_lobby(room)
        emit(events.CREATED, {"code": room.code, "playerId": request.sid, "youAreArbiter": True})

    @socketio.on("joinGame")
    def join_game(data=None):
        req = _parse("joinGame", data)
        room = _room_for(req)
        if room is None:
            emit(events.ERROR_MSG, events.MSG_INVALID_CODE)
            return

        _, replaced = service.join(room, request.sid, req.name, req.player_key)
        join_room(room.code)
        if replaced:
            leave_room(room.code, sid=replaced)

        _replay_phase(room)
        _broadcast_lobby(room)
        emit(
            events.JOINED,
            {"code": room.code, "playerId": request.sid, "youAreArbiter": room.is_arbiter(request.sid)},
        )

    @socketio.on("renamePlayer")
    def rename_player(data=None):
        req = _parse("renamePlayer", data)
        room = _room_for(req)
        if room is None:
            return
        if service.rename(room, request.sid, req.name):
            _broadcast_lobby(room)

    @socketio.on("leaveGame")
    def leave_game(data=None):
        req = _parse("leaveGame", data)
        room = _room_for(req)
        if room is None or request.sid not in room.players:
            return
        leave_room(room.code)
        _depart(room, request.sid)

    @socketio.on("startRound")
    def start_round(data=None):
        req = _parse("startRound", data)
        room = _room_for(req)
        if room is None:
            return
        ok = service.start_round(
            room,
            request.sid,
            letter=req.letter,
            categories=req.categories,
            category_source=category_source,
        )
        if ok:
            socketio.emit(events.ROUND_STARTED, views.round_started_view(room), to=room.code)

    @socketio.on("draft")
    def draft(data=None):
        req = _parse("draft", data)
        room = _room_for(req)
        if room is None:
            return
        service.save_draft(room, request.sid, req.answers)

    @socketio.on("submitAnswers")
    def submit_answers(data=None):
        req = _parse("submitAnswers", data)
        room = _room_for(req)
        if room is None:
            return
        accepted, advanced = service.submit_answers(room, request.sid, req.answers)
        if not accepted:
            return
        socketio.emit(events.PROGRESS, views.progress_view(room), to=room.code)
        if advanced:
            _broadcast_review(room)

    @socketio.on("forceReview")
    def force_review(data=None):
        req = _parse("forceReview", data)
        room = _room_for(req)
        if room is None:
            return
        if service.force_review(room, request.sid):
            _broadcast_review(room)

    @socketio.on("setReviewIndex")
    def set_review_index(data=None):
        req = _parse("setReviewIndex", data)
        room = _room_for(req)
        if room is None:
            return
        index = service.set_review_index(room, request.sid, req.index)
        if index is not None:
            socketio.emit(events.REVIEW_NAVIGATE, {"index": index}, to=room.code)

    @socketio.on("toggleValidation")
    def toggle_validation(data=None):
        req = _parse("toggleValidation", data)
        room = _room_for(req)
        if room is None:
            return
        valid = service.toggle_validation(room, request.sid, req.player_id, req.category)
        if valid is None:
            return
        socketio.emit(
            events.VALIDATION_UPDATED,
            {"playerId": req.player_id, "category": req.category, "valid": valid},
            to=room.code,
        )

    @socketio.on("endRound")
    def end_round(data=None):
        req = _parse("endRound", data)
        room = _room_for(req)
        if room is None:
            return
        if service.end_round(room, request.sid):
            socketio.emit(events.ROUND_ENDED, {"leaderboard": views.leaderboard(room)}, to=room.code)
            _broadcast_lobby(room)

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        # MVP linear scan; a connection normally sits in a single room.
        for room in registry.rooms_for(request.sid):
            _depart(room, request.sid)
