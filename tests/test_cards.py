import pytest

from holdem.cards import Card, Deck, Suit, build_deck, parse_cards, parse_label
from holdem.errors import InsufficientCards


def test_new_deck_has_52_distinct_cards_in_canonical_order():
    deck = Deck()
    cards = deck.draw(52)
    assert len(set(cards)) == 52
    assert cards[0] == Card(2, Suit.SPADES)
    assert cards[12] == Card(14, Suit.SPADES)
    assert cards[-1] == Card(14, Suit.CLUBS)


def test_shuffled_deck_deals_every_card_once_then_fails():
    deck = build_deck(seed=2024)
    seen = [deck.draw(1)[0] for _ in range(52)]
    assert len(set(seen)) == 52
    assert len(deck) == 0
    with pytest.raises(InsufficientCards):
        deck.draw(1)


def test_draw_never_returns_fewer_than_requested():
    deck = Deck()
    deck.draw(50)
    with pytest.raises(InsufficientCards, match="Not enough cards"):
        deck.draw(5)
    assert deck.remaining == 2


def test_same_seed_gives_same_order():
    assert build_deck(seed=9).draw(52) == build_deck(seed=9).draw(52)
    assert build_deck(seed=9).draw(52) != build_deck(seed=10).draw(52)


def test_burn_discards_top_card():
    deck = Deck()
    assert deck.burn() == Card(2, Suit.SPADES)
    assert deck.draw(1) == [Card(3, Suit.SPADES)]


def test_card_validation_rejects_invalid_values():
    with pytest.raises(ValueError, match="Invalid rank"):
        Card(1, Suit.HEARTS)
    with pytest.raises(ValueError, match="Invalid rank"):
        Card(15, Suit.HEARTS)
    with pytest.raises(ValueError, match="Invalid suit"):
        Card(14, "x")  # type: ignore[arg-type]


def test_card_text_forms():
    ace = Card(14, Suit.SPADES)
    ten = Card(10, Suit.HEARTS)
    assert ace.label == "As"
    assert str(ace) == "A♠"
    assert ten.label == "Th"
    assert str(ten) == "10♥"
    assert ten.is_red and not ace.is_red


@pytest.mark.parametrize(
    "label, expected",
    [
        ("As", Card(14, Suit.SPADES)),
        ("Td", Card(10, Suit.DIAMONDS)),
        ("10d", Card(10, Suit.DIAMONDS)),
        ("2c", Card(2, Suit.CLUBS)),
        ("K♥", Card(13, Suit.HEARTS)),
        ("10♣", Card(10, Suit.CLUBS)),
    ],
)
def test_parse_label_accepts_compact_and_display_forms(label, expected):
    assert parse_label(label) == expected


@pytest.mark.parametrize("label", ["", "A", "Ax", "1s", "invalid", "Zs"])
def test_parse_label_rejects_garbage(label):
    with pytest.raises(ValueError):
        parse_label(label)


def test_stacked_deck_rejects_duplicates():
    with pytest.raises(AssertionError):
        Deck.from_cards(parse_cards(["As", "As"]))
