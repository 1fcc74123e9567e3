import itertools
import random

import pytest

from engine.cards import Card, Rank, Suit, parse_card
from engine.deck import build_deck
from engine.registry import DEFAULT_REGISTRY
from engine.resolution import leading_play, resolve_winner, winning_play
from engine.rules_schema import RuleSet
from engine.trick import IncompleteTrickError, InvalidTrickShape, Trick, TrickError

HIGHEST = DEFAULT_REGISTRY.resolve("highest-card")
FOLLOWS = DEFAULT_REGISTRY.resolve("suit-follows")
SPADES = DEFAULT_REGISTRY.resolve("spades-trump")


def trick_of(*codes: str) -> Trick:
    seats = ["N", "E", "S", "W"]
    return Trick.from_plays(zip(seats, (parse_card(code) for code in codes)), table_size=len(codes))


def test_highest_card_scenario():
    trick = trick_of("7C", "KS", "2D", "QH")
    assert resolve_winner(trick, HIGHEST) == "E"


def test_suit_follows_scenario():
    trick = trick_of("7C", "KS", "2D", "9C")
    assert resolve_winner(trick, FOLLOWS) == "W"


def test_single_trump_wins_scenario():
    trick = trick_of("7C", "3S", "9C", "KC")
    assert resolve_winner(trick, SPADES) == "E"


def test_higher_trump_wins_scenario():
    trick = trick_of("7C", "3S", "KS", "9C")
    assert resolve_winner(trick, SPADES) == "S"


def test_without_trumps_spades_trump_ranks_lead_suit():
    trick = trick_of("7C", "AH", "9C", "2D")
    assert resolve_winner(trick, SPADES) == "S"


def test_lead_card_wins_when_nobody_follows():
    trick = trick_of("7C", "AH", "KD", "QH")
    assert resolve_winner(trick, FOLLOWS) == "N"


def test_spade_lead_is_trump_lead():
    trick = trick_of("2S", "AH", "AC", "AD")
    assert resolve_winner(trick, SPADES) == "N"


def test_equal_ranks_go_to_earlier_play():
    trick = trick_of("KH", "KS", "2D", "3C")
    assert resolve_winner(trick, HIGHEST) == "N"


def test_open_trick_cannot_be_resolved():
    trick = Trick.from_plays([("N", parse_card("7C")), ("E", parse_card("KS"))], table_size=4)
    with pytest.raises(IncompleteTrickError):
        resolve_winner(trick, HIGHEST)


def test_leading_play_previews_open_trick():
    trick = Trick.from_plays([("N", parse_card("7C")), ("E", parse_card("3S"))], table_size=4)
    assert leading_play(trick, SPADES).seat == "E"
    assert leading_play(trick, FOLLOWS).seat == "N"
    with pytest.raises(TrickError):
        leading_play(Trick(table_size=4), SPADES)


def test_malformed_trick_rejected():
    trick = trick_of("7C", "KS", "2D", "9C")
    trick.plays.append(trick.plays[0])
    trick.table_size = 5
    with pytest.raises(InvalidTrickShape):
        resolve_winner(trick, HIGHEST)


def test_custom_rule_set_composes_without_new_code():
    hearts_loose = RuleSet(
        id="hearts-loose",
        name="Hearts Trump, No Following",
        follow_suit_required=False,
        trump_suit=Suit.HEARTS,
    )
    assert resolve_winner(trick_of("7C", "KS", "2H", "9C"), hearts_loose) == "S"
    assert resolve_winner(trick_of("7C", "KS", "2D", "9C"), hearts_loose) == "E"


def test_winning_play_reports_card():
    play = winning_play(trick_of("7C", "3S", "KS", "9C"), SPADES)
    assert play.card == Card(Rank.KING, Suit.SPADES)


def random_tricks(count: int, seed: int = 11):
    rng = random.Random(seed)
    deck = build_deck()
    for _ in range(count):
        yield Trick.from_plays(zip(["N", "E", "S", "W"], rng.sample(deck, 4)))


@pytest.mark.parametrize("rule_set", [HIGHEST, FOLLOWS, SPADES], ids=lambda rs: rs.id)
def test_winner_is_exactly_one_seat_of_the_trick(rule_set):
    for trick in random_tricks(500):
        winner = resolve_winner(trick, rule_set)
        assert trick.seats().count(winner) == 1
        assert resolve_winner(trick, rule_set) == winner


def test_trump_precedence_property():
    for trick in random_tricks(500, seed=3):
        trumps = [play for play in trick.plays if play.card.suit is Suit.SPADES]
        winner = winning_play(trick, SPADES)
        if trumps:
            assert winner.card.suit is Suit.SPADES
            assert winner.card.rank.value == max(play.card.rank.value for play in trumps)


def test_suit_follows_winner_always_of_lead_suit():
    deck = build_deck()
    for cards in itertools.islice(itertools.permutations(deck[::7], 4), 400):
        trick = Trick.from_plays(zip(["N", "E", "S", "W"], cards))
        assert winning_play(trick, FOLLOWS).card.suit is trick.lead_suit()
