"""Streamlit table for playing tricks against computer seats."""

from __future__ import annotations

import random

import streamlit as st

from bots.baseline_greedy import GreedyBot
from bots.random_bot import RandomBot
from engine.cards import card_label, deserialize_card, serialize_card
from engine.deck import build_deck, split_deck
from engine.registry import DEFAULT_REGISTRY
from engine.service import TableService

HUMAN_SEAT = "N"
SEATS = ["N", "E", "S", "W"]
HAND_SIZE = 7


def get_service() -> TableService:
    if "table_service" not in st.session_state:
        st.session_state["table_service"] = TableService()
    return st.session_state["table_service"]


def get_bots() -> dict:
    if "bots" not in st.session_state:
        st.session_state["bots"] = {"E": GreedyBot(), "S": RandomBot(), "W": GreedyBot()}
    return st.session_state["bots"]


def rerun() -> None:
    try:
        st.rerun()
    except AttributeError:
        st.experimental_rerun()


def deal_new_table(service: TableService, rule_set_index: int) -> None:
    deck = build_deck()
    random.shuffle(deck)
    hands = split_deck(deck, SEATS, hand_size=HAND_SIZE)
    rule_set = DEFAULT_REGISTRY.by_index(rule_set_index)
    service.start_table(
        {seat: [serialize_card(card) for card in cards] for seat, cards in hands.items()},
        rule_set_id=rule_set.id,
        turn_order=SEATS,
    )
    rerun()


def unique_options(cards_payload: list[dict]) -> dict[str, dict]:
    options = {}
    for idx, payload in enumerate(cards_payload):
        label = card_label(deserialize_card(payload))
        options[f"{label} [{idx}]"] = payload
    return options


def advance_bots(service: TableService) -> None:
    """Let computer seats play until it is the human's turn or the table ends."""
    assert service.coordinator is not None
    bots = get_bots()
    while not service.coordinator.is_finished():
        seat = service.coordinator.current_seat()
        if seat == HUMAN_SEAT:
            return
        card = bots[seat].play_card(service.coordinator, seat)
        result = service.play_card(seat, serialize_card(card))
        if result.status == "trick_closed":
            st.toast(f"{result.winner} wins the trick!")


def render_rule_set_picker(service: TableService) -> int:
    summaries = service.rule_sets()
    names = [entry["name"] for entry in summaries]
    index = st.sidebar.selectbox("Rule set", range(len(names)), format_func=lambda i: names[i])
    st.sidebar.caption(summaries[index]["description"])
    return index


def render_trick(view) -> None:
    st.subheader("Current trick")
    if not view.trick.plays:
        st.write(f"{view.current_seat} to lead.")
    for play in view.trick.plays:
        st.write(f"{play.seat}: {play.label}")
    if view.leading_seat:
        st.caption(f"Currently winning: {view.leading_seat}")


def render_play_controls(service: TableService, view) -> None:
    if view.current_seat != HUMAN_SEAT:
        st.info(f"Waiting for {view.current_seat}.")
        return
    options = unique_options(view.legal_moves)
    if not options:
        st.warning("No legal moves available.")
        return
    selection = st.selectbox("Play a card", list(options.keys()))
    if st.button("Play selected card"):
        result = service.play_card(HUMAN_SEAT, options[selection])
        if result.status == "rejected":
            st.error(f"Play rejected: {result.reason}")
            return
        if result.status == "trick_closed":
            st.toast(f"{result.winner} wins the trick!")
        rerun()


def main() -> None:
    st.set_page_config(page_title="Trick Table", layout="wide")
    st.title("Trick Table")

    service = get_service()
    rule_set_index = render_rule_set_picker(service)

    if st.sidebar.button("Deal new table"):
        deal_new_table(service, rule_set_index)

    if not service.has_table():
        st.info("Deal a new table to begin.")
        return

    assert service.coordinator is not None
    if service.coordinator.rule_set.id != DEFAULT_REGISTRY.by_index(rule_set_index).id:
        if service.coordinator.round.trick.is_empty():
            service.select_rule_set_index(rule_set_index)
        else:
            st.sidebar.warning("The new rule set applies from the next trick.")

    advance_bots(service)
    view = service.get_table_view(HUMAN_SEAT)

    cols = st.columns(2)
    with cols[0]:
        st.subheader("Your hand")
        for label in view.hand_labels:
            st.write(label)
    with cols[1]:
        st.write(f"Rule set: {view.rule_set['name']}")
        st.write(f"Cards left: {view.remaining_cards}")
        render_trick(view)

    with st.expander("Trick history"):
        for index, entry in enumerate(view.trick_history, start=1):
            st.write(f"Trick {index} ({entry['rule_set']}): won by {entry['winner']}")

    if view.finished:
        st.success("All cards played.")
        return
    render_play_controls(service, view)


if __name__ == "__main__":
    main()
