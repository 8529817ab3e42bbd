import pytest

from petitbac.realtime import events
from petitbac.realtime.events import InvalidPayload, parse_request


def test_create_game_defaults():
    req = parse_request("createGame", None)
    assert req == events.CreateGame()
    assert req.arbiter_plays is True
    assert req.end_mode == "all"
    assert req.random_themes is False


def test_create_game_reads_settings_and_legacy_alias():
    req = parse_request(
        "createGame",
        {"name": "Alice", "hostPlays": False, "endMode": "first", "randomThemes": 1, "categories": ["A", ""]},
    )
    assert req.arbiter_plays is False
    assert req.end_mode == "first"
    assert req.random_themes is True
    assert req.categories == ["A"]

    assert parse_request("createGame", {"endMode": "whatever"}).end_mode == "all"


def test_code_is_required_and_normalized():
    assert parse_request("joinGame", {"code": " abcde ", "name": "Bob"}).code == "ABCDE"
    for event in ("joinGame", "startRound", "submitAnswers", "endRound"):
        with pytest.raises(InvalidPayload):
            parse_request(event, {"name": "Bob"})


def test_toggle_validation_requires_target():
    with pytest.raises(InvalidPayload):
        parse_request("toggleValidation", {"code": "ABCDE", "category": "Fruit"})
    req = parse_request("toggleValidation", {"code": "ABCDE", "playerId": "p1", "category": "Fruit"})
    assert (req.player_id, req.category) == ("p1", "Fruit")


def test_submit_answers_without_answers():
    assert parse_request("submitAnswers", {"code": "ABCDE"}).answers is None
    assert parse_request("submitAnswers", {"code": "ABCDE", "answers": "x"}).answers is None


def test_unknown_event():
    with pytest.raises(InvalidPayload):
        parse_request("selfDestruct", {})
