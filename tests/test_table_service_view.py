import logging

import pytest

from engine.cards import parse_card, serialize_card
from engine.registry import UnknownRuleSetError
from engine.service import TableService, list_rule_sets, select_rule_set, submit_play
from engine.state import RuleSetLocked
from engine.trick import IncompleteTrickError


def payloads(*codes):
    return [serialize_card(parse_card(code)) for code in codes]


def start(service: TableService, rule_set_id: str = "suit-follows"):
    return service.start_table(
        {
            "N": payloads("7C", "AH"),
            "E": payloads("KS", "2H"),
            "S": payloads("2D", "4H"),
            "W": payloads("9C", "3D"),
        },
        rule_set_id=rule_set_id,
    )


def test_public_contract_functions():
    assert [entry["id"] for entry in list_rule_sets()] == ["highest-card", "suit-follows", "spades-trump"]
    assert select_rule_set("spades-trump").name == "Spades Trump"
    with pytest.raises(UnknownRuleSetError):
        select_rule_set("euchre")


def test_initial_view():
    service = TableService()
    view = start(service)
    assert view.rule_set["id"] == "suit-follows"
    assert view.current_seat == "N"
    assert view.turn_order == ["N", "E", "S", "W"]
    assert view.hand_labels == ["Seven of Clubs", "Ace of Hearts"]
    assert view.legal_moves == payloads("7C", "AH")
    assert view.trick.plays == []
    assert view.leading_seat is None
    assert not view.finished


def test_play_updates_view_and_history(caplog):
    service = TableService()
    start(service)
    with caplog.at_level(logging.INFO, logger="engine.service"):
        assert service.play_card("N", payloads("7C")[0]).status == "awaiting_play"
        service.play_card("E", payloads("KS")[0])
        service.play_card("S", payloads("2D")[0])
        result = service.play_card("W", payloads("9C")[0])

    assert result.status == "trick_closed"
    assert result.winner == "W"
    assert any("trick_closed" in message for message in caplog.messages)

    view = service.get_table_view()
    assert view.current_seat == "W"
    assert view.trick_history[0]["winner"] == "W"
    assert [play.label for play in view.trick_history[0]["trick"].plays] == [
        "Seven of Clubs",
        "King of Spades",
        "Two of Diamonds",
        "Nine of Clubs",
    ]


def test_rejected_play_reports_reason():
    service = TableService()
    start(service)
    service.play_card("N", payloads("AH")[0])
    result = service.play_card("E", payloads("KS")[0])
    assert result.status == "rejected"
    assert result.reason == "must_follow_suit"
    view = service.get_table_view()
    assert view.current_seat == "E"
    assert view.leading_seat == "N"


def test_rule_set_selection_by_index():
    service = TableService()
    start(service, "highest-card")
    view = service.select_rule_set_index(2)
    assert view.rule_set["id"] == "spades-trump"
    service.play_card("N", payloads("7C")[0])
    with pytest.raises(RuleSetLocked):
        service.select_rule_set_index(0)


def test_submit_play_function():
    service = TableService()
    start(service)
    state = submit_play(service.coordinator, "N", parse_card("7C"))
    assert state.seat == "E"


def test_resolve_without_table():
    service = TableService()
    plays = [
        {"seat": "N", "card": {"rank": 7, "suit": "clubs"}},
        {"seat": "E", "card": {"rank": 3, "suit": "spades"}},
        {"seat": "S", "card": {"rank": "king", "suit": "spades"}},
        {"seat": "W", "card": {"rank": 9, "suit": "clubs"}},
    ]
    assert service.resolve(plays, "spades-trump") == "S"


def test_requires_table():
    with pytest.raises(RuntimeError):
        TableService().get_table_view()


def test_unknown_lead_policy():
    with pytest.raises(ValueError):
        TableService().start_table({"N": payloads("2C")}, rule_set_id="highest-card", lead_policy="dealer")


def test_resolve_winner_reexport_requires_closed_trick():
    from engine.service import resolve_winner
    from engine.trick import Trick

    with pytest.raises(IncompleteTrickError):
        resolve_winner(Trick.from_plays([("N", parse_card("2C"))], table_size=2), select_rule_set("highest-card"))
