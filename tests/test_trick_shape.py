import pytest

from engine.cards import Card, Rank, Suit
from engine.trick import IncompleteTrickError, InvalidTrickShape, Play, Trick, TrickError


def test_trick_lifecycle():
    trick = Trick(table_size=2)
    assert trick.is_empty()
    assert trick.is_open()
    assert trick.lead_suit() is None

    trick.add_play("N", Card(Rank.SEVEN, Suit.CLUBS))
    assert trick.lead_suit() is Suit.CLUBS
    assert trick.leader() == "N"

    trick.add_play("E", Card(Rank.KING, Suit.SPADES))
    assert trick.is_full()
    assert not trick.is_open()
    assert trick.plays == [Play("N", Card(Rank.SEVEN, Suit.CLUBS)), Play("E", Card(Rank.KING, Suit.SPADES))]


def test_add_play_rejects_full_trick():
    trick = Trick(table_size=1)
    trick.add_play("N", Card(Rank.TWO, Suit.HEARTS))
    with pytest.raises(InvalidTrickShape):
        trick.add_play("E", Card(Rank.THREE, Suit.HEARTS))


def test_add_play_rejects_duplicate_seat_and_card():
    trick = Trick(table_size=4)
    trick.add_play("N", Card(Rank.TWO, Suit.HEARTS))
    with pytest.raises(InvalidTrickShape):
        trick.add_play("N", Card(Rank.THREE, Suit.HEARTS))
    with pytest.raises(InvalidTrickShape):
        trick.add_play("E", Card(Rank.TWO, Suit.HEARTS))
    assert len(trick.plays) == 1


def test_from_plays_checks_shape():
    with pytest.raises(InvalidTrickShape):
        Trick.from_plays([("N", Card(Rank.TWO, Suit.HEARTS)), ("N", Card(Rank.ACE, Suit.HEARTS))])
    with pytest.raises(InvalidTrickShape):
        Trick.from_plays(
            [("N", Card(Rank.TWO, Suit.HEARTS)), ("E", Card(Rank.TWO, Suit.HEARTS))],
        )
    with pytest.raises(InvalidTrickShape):
        Trick.from_plays([("N", Card(Rank.TWO, Suit.HEARTS)), ("E", Card(Rank.ACE, Suit.HEARTS))], table_size=1)


def test_trick_errors_share_a_base():
    assert issubclass(IncompleteTrickError, TrickError)
    assert issubclass(InvalidTrickShape, TrickError)


def test_copy_is_independent():
    trick = Trick.from_plays([("N", Card(Rank.TWO, Suit.HEARTS))], table_size=4)
    clone = trick.copy()
    clone.add_play("E", Card(Rank.ACE, Suit.HEARTS))
    assert len(trick.plays) == 1
    assert len(clone.plays) == 2
