import random

import pytest

from mrhouse.slot_machine import (
    Embed,
    FiveOfAKind,
    MinCount,
    MinCountAnyDistribution,
    PayRule,
    SlotMachine,
    Symbol,
    ThreeOfAKind,
    generate_weighted_symbol_pool,
)

GORE_EMOJI = "<:gore:854587419391164457>"
WHITE_EMOJI = "<:white:785272845890486293>"


class SequenceRng:
    """Returns the given symbols in order from choice()."""

    def __init__(self, picks):
        self._picks = iter(picks)

    def choice(self, seq):
        return next(self._picks)


def jackpot_table():
    return [
        PayRule(FiveOfAKind(Symbol.GORE), 500, True),
        PayRule(MinCount(Symbol.SMILEYES, 1), 2),
        PayRule(ThreeOfAKind(Symbol.SMILEYES), 25),
    ]


def test_five_of_a_kind_matches():
    assert FiveOfAKind(Symbol.GORE).matches([Symbol.GORE] * 5) is True
    assert FiveOfAKind(Symbol.GORE).matches([Symbol.GORE] * 4 + [Symbol.MEAN]) is False


def test_three_of_a_kind_matches():
    pattern = ThreeOfAKind(Symbol.MEAN)
    assert pattern.matches([Symbol.MEAN] * 3 + [Symbol.GORE] * 2) is True
    assert pattern.matches([Symbol.MEAN] * 2 + [Symbol.GORE] * 3) is False


def test_min_count_any_distribution_sums_counts():
    pattern = MinCountAnyDistribution([Symbol.SMUGBROW, Symbol.MEAN], 3)
    hit = [Symbol.SMUGBROW, Symbol.MEAN, Symbol.MEAN, Symbol.BLANK, Symbol.GORE]
    miss = [Symbol.SMUGBROW, Symbol.MEAN, Symbol.BLANK, Symbol.BLANK, Symbol.GORE]
    assert pattern.matches(hit) is True
    assert pattern.matches(miss) is False


def test_min_count_matches():
    pattern = MinCount(Symbol.SMILEYES, 2)
    assert pattern.matches([Symbol.SMILEYES, Symbol.SMILEYES, Symbol.BLANK]) is True
    assert pattern.matches([Symbol.SMILEYES, Symbol.BLANK, Symbol.BLANK]) is False


def test_weighted_pool_counts_follow_weights():
    weights = {Symbol.GORE: 3, Symbol.BLANK: 5}
    pool = generate_weighted_symbol_pool(weights)
    assert pool.count(Symbol.GORE) == weights[Symbol.GORE]
    assert pool.count(Symbol.BLANK) == weights[Symbol.BLANK]
    assert len(pool) == sum(weights.values())


def test_weighted_pool_ignores_non_positive_weights():
    pool = generate_weighted_symbol_pool({Symbol.GORE: -4.0, Symbol.MEAN: 0.0})
    assert pool == []


def test_table_without_jackpot_is_rejected():
    with pytest.raises(ValueError):
        SlotMachine(10, [PayRule(MinCount(Symbol.GORE, 1), 2)], 0.01, [Symbol.GORE])


def test_jackpot_starts_at_minimum_when_previous_is_lower():
    machine = SlotMachine(10, jackpot_table(), 0.01, [Symbol.BLANK], 3.0)
    assert machine.min_jackpot == 500
    assert machine.rolling_jackpot == machine.min_jackpot


def test_jackpot_keeps_higher_previous_value():
    machine = SlotMachine(10, jackpot_table(), 0.01, [Symbol.BLANK], 812.25)
    assert machine.rolling_jackpot == 812.25


def test_jackpot_hit_pays_jackpot_and_resets():
    machine = SlotMachine(10, jackpot_table(), 0.01, [Symbol.GORE], 812.25)
    result = machine.play()
    assert result.payout == int(812.25)
    assert result.symbols == [GORE_EMOJI] * 5
    assert machine.rolling_jackpot == machine.min_jackpot
    assert result.current_jackpot_value == machine.rolling_jackpot


def test_losing_spin_grows_jackpot():
    machine = SlotMachine(10, jackpot_table(), 0.01, [Symbol.BLANK], 0.0, random.Random(1))
    before = machine.rolling_jackpot
    result = machine.play()
    assert result.payout == 0
    assert result.symbols == [WHITE_EMOJI] * 5
    assert machine.rolling_jackpot == pytest.approx(before + 10 * 0.01)
    assert machine.rolling_jackpot > before


def test_tiny_growth_is_rounded_away():
    machine = SlotMachine(1, jackpot_table(), 1e-10, [Symbol.BLANK], 0.0)
    before = machine.rolling_jackpot
    machine.play()
    assert machine.rolling_jackpot == before


def test_first_matching_rule_wins():
    machine = SlotMachine(10, jackpot_table(), 0.01, [Symbol.SMILEYES])
    assert machine.play().payout == 2


def test_results_are_sorted_by_symbol_order():
    picks = [Symbol.BLANK, Symbol.SMILEYES, Symbol.MEAN, Symbol.GORE, Symbol.MEAN]
    pool = list(Symbol)
    machine = SlotMachine(10, jackpot_table(), 0.01, pool, 0.0, SequenceRng(picks))
    result = machine.play()
    assert result.symbols == [machine.symbol_string(s) for s in sorted(picks)]
    assert result.symbols[0] == GORE_EMOJI
    assert result.symbols[-1] == WHITE_EMOJI


def test_empty_pool_cannot_play():
    machine = SlotMachine(10, jackpot_table(), 0.01, [])
    with pytest.raises(ValueError):
        machine.play()


def test_symbol_string():
    machine = SlotMachine(10, jackpot_table(), 0.01, [Symbol.BLANK])
    assert machine.symbol_string(Symbol.BLANK) == WHITE_EMOJI
    assert machine.symbol_string(Symbol.GORE) == GORE_EMOJI


def test_pay_rule_titles():
    machine = SlotMachine(10, jackpot_table(), 0.01, [Symbol.BLANK])
    gore = machine.symbol_string(Symbol.GORE)
    mean = machine.symbol_string(Symbol.MEAN)
    assert machine.pay_rule_title(PayRule(FiveOfAKind(Symbol.GORE), 500, True)) == gore * 5 + " (Jackpot)"
    assert machine.pay_rule_title(PayRule(FiveOfAKind(Symbol.MEAN), 250)) == mean * 5
    assert machine.pay_rule_title(PayRule(ThreeOfAKind(Symbol.MEAN), 25)) == mean * 3
    assert machine.pay_rule_title(PayRule(MinCount(Symbol.GORE, 2), 6)) == gore * 2
    any_rule = PayRule(MinCountAnyDistribution([Symbol.GORE, Symbol.MEAN], 3), 6)
    assert machine.pay_rule_title(any_rule) == f"3x any of [{gore}, {mean}]"


def test_pay_table_embed():
    table = jackpot_table()
    machine = SlotMachine(10, table, 0.01, [Symbol.BLANK])
    embed = machine.pay_table_embed()
    assert isinstance(embed, Embed)
    assert embed.title == "Pay Table - 10 Libcoin a Spin"
    assert embed.footer == "RTP: ~97%"
    assert embed.color == 0x5B9E48
    assert len(embed.fields) == len(table)
    assert embed.fields[0].value == "500"
    assert embed.fields[1].value == str(table[1].payout)
    assert all(not f.inline for f in embed.fields)


def test_pay_table_embed_shows_fractional_jackpot():
    machine = SlotMachine(10, jackpot_table(), 0.01, [Symbol.BLANK], 812.25)
    assert machine.pay_table_embed().fields[0].value == "812.25"