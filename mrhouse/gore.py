"""The gore-themed slot machine configuration."""

from __future__ import annotations

import random

from mrhouse.slot_machine import (
    FiveOfAKind,
    MinCount,
    MinCountAnyDistribution,
    PayRule,
    SlotMachine,
    Symbol,
    ThreeOfAKind,
    generate_weighted_symbol_pool,
)

COST_PER_PLAY = 10
JACKPOT_GROWTH_RATE = 0.01

GORE_WEIGHTS: dict[Symbol, float] = {
    Symbol.GORE: 9.0,
    Symbol.MEAN: 10.0,
    Symbol.MAGNATHONK: 12.0,
    Symbol.SMUGBROW: 19.0,
    Symbol.SMILEYES: 20.0,
    Symbol.BLANK: 6.0,
}


def gore_slots_paytable() -> list[PayRule]:
    """Pay rules in the order they are checked."""
    return [
        PayRule(FiveOfAKind(Symbol.GORE), 500, True),
        PayRule(FiveOfAKind(Symbol.MEAN), 250),
        PayRule(FiveOfAKind(Symbol.MAGNATHONK), 250),
        PayRule(ThreeOfAKind(Symbol.SMUGBROW), 25),
        PayRule(ThreeOfAKind(Symbol.SMILEYES), 25),
        PayRule(MinCount(Symbol.SMILEYES, 2), 6),
        PayRule(
            MinCountAnyDistribution(
                (Symbol.SMUGBROW, Symbol.MAGNATHONK, Symbol.MEAN), 3
            ),
            6,
        ),
        PayRule(MinCount(Symbol.SMILEYES, 1), 2),
    ]


def gore_slots_weights() -> list[Symbol]:
    """The weighted symbol pool the reels draw from."""
    return generate_weighted_symbol_pool(GORE_WEIGHTS)


def generate_gore_slots(
    previous_rolling_jackpot: float = 0.0, rng: random.Random | None = None
) -> SlotMachine:
    """Build the gore slot machine, resuming from a previous jackpot."""
    return SlotMachine(
        COST_PER_PLAY,
        gore_slots_paytable(),
        JACKPOT_GROWTH_RATE,
        gore_slots_weights(),
        previous_rolling_jackpot,
        rng,
    )