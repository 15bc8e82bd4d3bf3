import random

import pytest

from holdem.cards import Card, RANKS, Suit, build_deck, parse_cards
from holdem.errors import InsufficientCards
from holdem.evaluator import EvaluatedHand, HandCategory, describe_rank, evaluate, evaluate_exhaustive


def best(labels):
    return evaluate(parse_cards(labels))


def test_evaluate_identifies_all_hand_categories():
    cases = [
        (HandCategory.ROYAL_FLUSH, ["Ah", "Kh", "Qh", "Jh", "Th"]),
        (HandCategory.STRAIGHT_FLUSH, ["9h", "Kh", "Qh", "Jh", "Th"]),
        (HandCategory.FOUR_OF_A_KIND, ["As", "Ah", "Ad", "Ac", "Kd"]),
        (HandCategory.FULL_HOUSE, ["Qc", "Qd", "Qs", "9h", "9s"]),
        (HandCategory.FLUSH, ["Ah", "Jh", "9h", "6h", "2h"]),
        (HandCategory.STRAIGHT, ["9h", "8d", "7c", "6s", "5h"]),
        (HandCategory.THREE_OF_A_KIND, ["8h", "8d", "8s", "Qd", "Js"]),
        (HandCategory.TWO_PAIR, ["7h", "7d", "4s", "4c", "As"]),
        (HandCategory.PAIR, ["6h", "6s", "Qh", "8d", "4c"]),
        (HandCategory.HIGH_CARD, ["As", "Kd", "Jh", "9c", "4d"]),
    ]

    for expected, labels in cases:
        assert best(labels).category == expected, f"labels={labels}"


def test_royal_flush_beats_straight_flush():
    royal = best(["As", "Ks", "Qs", "Js", "Ts", "2d", "3c"])
    king_high = best(["Kh", "Qh", "Jh", "Th", "9h", "2d", "3c"])
    assert royal.category == HandCategory.ROYAL_FLUSH
    assert king_high.category == HandCategory.STRAIGHT_FLUSH
    assert royal > king_high


def test_wheel_is_the_lowest_straight():
    wheel = best(["Ah", "2d", "3c", "4s", "5h", "9d", "Kd"])
    six_high = best(["6h", "2d", "3c", "4s", "5h", "9d", "Kd"])
    assert wheel.category == HandCategory.STRAIGHT
    assert wheel.ranks == (5, 4, 3, 2, 1)
    assert six_high > wheel


def test_mixed_suit_wheels_tie():
    board = ["3c", "4s", "5h", "9d", "Kd"]
    hand_a = best(["Ah", "2d"] + board)
    hand_b = best(["Ac", "2s"] + board)
    assert hand_a == hand_b


def test_steel_wheel_is_a_straight_flush():
    hand = best(["Ah", "2h", "3h", "4h", "5h", "Kd", "Kc"])
    assert hand.category == HandCategory.STRAIGHT_FLUSH
    assert hand.ranks == (5, 4, 3, 2, 1)


def test_full_house_compares_trips_then_pair():
    kings_full = best(["Kh", "Kd", "Ks", "2h", "2s"])
    queens_full = best(["Qh", "Qd", "Qs", "Ah", "As"])
    assert kings_full > queens_full
    assert kings_full.ranks == (13, 2)


def test_two_trips_make_a_full_house_with_the_higher_set():
    hand = best(["9h", "9d", "9s", "4h", "4s", "4d", "Ac"])
    assert hand == EvaluatedHand(HandCategory.FULL_HOUSE, (9, 4))


def test_two_pair_uses_third_pair_as_kicker():
    hand = best(["Jh", "Jd", "8s", "8h", "5c", "5d", "2c"])
    assert hand == EvaluatedHand(HandCategory.TWO_PAIR, (11, 8, 5))


def test_kickers_break_pair_ties():
    hand_a = best(["Ah", "Ad", "Kc", "Qs", "9h", "2d", "3c"])
    hand_b = best(["Ah", "Ad", "Qc", "Js", "8h", "2d", "3c"])
    assert hand_a > hand_b
    assert hand_a.ranks == (14, 13, 12, 9)


def test_flush_uses_top_five_of_suit():
    hand = best(["Ah", "Jh", "9h", "6h", "2h", "3h", "Kd"])
    assert hand == EvaluatedHand(HandCategory.FLUSH, (14, 11, 9, 6, 3))


def test_quads_beat_flush_on_the_same_board():
    board = ["7h", "7d", "7s", "Kh", "2h"]
    quads = best(["7c", "3d"] + board)
    flush = best(["Ah", "9h"] + board)
    assert quads.category == HandCategory.FOUR_OF_A_KIND
    assert quads > flush


def test_requires_at_least_five_cards():
    with pytest.raises(InsufficientCards):
        evaluate(parse_cards(["Ah", "Kh", "Qh", "Jh"]))
    with pytest.raises(InsufficientCards):
        evaluate_exhaustive(parse_cards(["Ah"]))


def test_rejects_more_than_seven_cards():
    eight = parse_cards(["Ah", "Kh", "Qh", "Jh", "Th", "9h", "8h", "7h"])
    with pytest.raises(ValueError):
        evaluate(eight)
    with pytest.raises(ValueError):
        evaluate_exhaustive(eight)


def test_describe_rank_names_category():
    assert describe_rank(best(["Qc", "Qd", "Qs", "9h", "9s"])) == "full_house"
    assert best(["As", "Ks", "Qs", "Js", "Ts"]).name == "royal_flush"


@pytest.mark.parametrize("size", [5, 6, 7])
def test_pattern_evaluator_matches_exhaustive_search(size):
    rng = random.Random(size)
    deck = [Card(rank, suit) for suit in Suit for rank in RANKS]
    for _ in range(1_500):
        cards = rng.sample(deck, size)
        assert evaluate(cards) == evaluate_exhaustive(cards), [card.label for card in cards]


def test_ordering_agrees_with_exhaustive_search_on_random_pairs():
    deck = build_deck(seed=777).draw(52)
    rng = random.Random(5)
    for _ in range(500):
        a = rng.sample(deck, 7)
        b = rng.sample(deck, 7)
        fast = (evaluate(a) > evaluate(b), evaluate(a) == evaluate(b))
        slow = (evaluate_exhaustive(a) > evaluate_exhaustive(b), evaluate_exhaustive(a) == evaluate_exhaustive(b))
        assert fast == slow
