"""Weighted five-reel slot machine with a rolling jackpot."""

from __future__ import annotations

import math
import random
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import Union

EMBED_COLOR = 0x5B9E48
REELS = 5
_U32_MAX = 2**32 - 1
_JACKPOT_DECIMALS = 8


class Symbol(IntEnum):
    """Reel symbols; the declaration order is the order results are sorted in."""

    GORE = 0
    MEAN = 1
    MAGNATHONK = 2
    SMUGBROW = 3
    SMILEYES = 4
    BLANK = 5


SYMBOL_EMOJI: dict[Symbol, str] = {
    Symbol.GORE: "<:gore:854587419391164457>",
    Symbol.MEAN: "<:mean:1260290196541280288>",
    Symbol.MAGNATHONK: "<:magnathonk:928158272836472872>",
    Symbol.SMUGBROW: "<:smugbrow:1013536644621664268>",
    Symbol.SMILEYES: "<:smileyes:927806099661422613>",
    Symbol.BLANK: "<:white:785272845890486293>",
}


@dataclass(frozen=True)
class FiveOfAKind:
    """Every reel shows the same symbol."""

    symbol: Symbol

    def matches(self, symbols: Sequence[Symbol]) -> bool:
        return all(s == self.symbol for s in symbols)


@dataclass(frozen=True)
class ThreeOfAKind:
    """At least three reels show the symbol."""

    symbol: Symbol

    def matches(self, symbols: Sequence[Symbol]) -> bool:
        return sum(1 for s in symbols if s == self.symbol) >= 3


@dataclass(frozen=True)
class MinCountAnyDistribution:
    """The listed symbols together appear at least ``min_count`` times."""

    symbols: tuple[Symbol, ...]
    min_count: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbols", tuple(self.symbols))

    def matches(self, symbols: Sequence[Symbol]) -> bool:
        total = sum(sum(1 for s in symbols if s == wanted) for wanted in self.symbols)
        return total >= self.min_count


@dataclass(frozen=True)
class MinCount:
    """The symbol appears at least ``min_count`` times."""

    symbol: Symbol
    min_count: int

    def matches(self, symbols: Sequence[Symbol]) -> bool:
        return sum(1 for s in symbols if s == self.symbol) >= self.min_count


PayPattern = Union[FiveOfAKind, ThreeOfAKind, MinCountAnyDistribution, MinCount]


@dataclass(frozen=True)
class PayRule:
    """A winning pattern and what it pays."""

    pattern: PayPattern
    payout: int
    is_jackpot: bool = False


@dataclass(frozen=True)
class PlayResult:
    """Outcome of one spin."""

    symbols: list[str]
    payout: int
    current_jackpot_value: float


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool


@dataclass(frozen=True)
class Embed:
    """A chat message card: title, colour, optional footer and fields."""

    title: str
    color: int = EMBED_COLOR
    footer: str | None = None
    fields: tuple[EmbedField, ...] = field(default_factory=tuple)


def generate_weighted_symbol_pool(weights: Mapping[Symbol, float]) -> list[Symbol]:
    """Repeat each symbol as many times as its weight, truncated to a whole number."""
    pool: list[Symbol] = []
    for symbol, weight in weights.items():
        count = int(weight) if weight > 0 else 0
        pool.extend([symbol] * count)
    return pool


def _round_half_away(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _round_jackpot(value: float) -> float:
    factor = 10.0**_JACKPOT_DECIMALS
    return _round_half_away(value * factor) / factor


def _to_u32(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def _format_number(value: float) -> str:
    """Shortest decimal form, without a trailing ``.0`` or exponent."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    text = repr(value)
    if "e" in text and math.isfinite(value):
        return format(Decimal(text), "f")
    return text


class SlotMachine:
    """A slot machine with a pay table and a jackpot that grows with each losing spin."""

    def __init__(
        self,
        cost_per_play: int,
        pay_table: Iterable[PayRule],
        jackpot_growth_rate: float,
        weighted_symbol_pool: Iterable[Symbol],
        previous_rolling_jackpot: float = 0.0,
        rng: random.Random | None = None,
    ) -> None:
        self.cost_per_play = cost_per_play
        self._pay_table = list(pay_table)
        self._jackpot_growth_rate = jackpot_growth_rate
        self._pool = list(weighted_symbol_pool)
        self._rng = rng if rng is not None else random.Random()

        jackpot_rule = next((rule for rule in self._pay_table if rule.is_jackpot), None)
        if jackpot_rule is None:
            raise ValueError(
                "Pay table must contain at least one jackpot rule (is_jackpot = true)"
            )
        self._min_jackpot = jackpot_rule.payout
        if previous_rolling_jackpot < self._min_jackpot:
            self._rolling_jackpot = float(self._min_jackpot)
        else:
            self._rolling_jackpot = float(previous_rolling_jackpot)

    @property
    def rolling_jackpot(self) -> float:
        return self._rolling_jackpot

    @property
    def min_jackpot(self) -> int:
        return self._min_jackpot

    @property
    def pay_table(self) -> tuple[PayRule, ...]:
        return tuple(self._pay_table)

    def _spin(self) -> list[Symbol]:
        if not self._pool:
            raise ValueError("Symbol pool is empty")
        return sorted(self._rng.choice(self._pool) for _ in range(REELS))

    def play(self) -> PlayResult:
        """Spin once, pay the first matching rule and update the jackpot."""
        symbols = self._spin()
        current = self._rolling_jackpot

        payout = 0.0
        jackpot_hit = False
        for rule in self._pay_table:
            if rule.pattern.matches(symbols):
                payout = float(rule.payout)
                if rule.is_jackpot:
                    payout = current
                    jackpot_hit = True
                break

        if jackpot_hit:
            next_jackpot = float(self._min_jackpot)
        else:
            next_jackpot = current + self.cost_per_play * self._jackpot_growth_rate
        self._rolling_jackpot = _round_jackpot(next_jackpot)

        return PlayResult(
            symbols=[self.symbol_string(s) for s in symbols],
            payout=_to_u32(payout),
            current_jackpot_value=self._rolling_jackpot,
        )

    def symbol_string(self, symbol: Symbol) -> str:
        """The emoji shown for a symbol."""
        return SYMBOL_EMOJI.get(symbol, "Unknown")

    def pay_rule_title(self, rule: PayRule) -> str:
        """A human-readable description of what a rule needs."""
        pattern = rule.pattern
        if isinstance(pattern, FiveOfAKind):
            indicator = " (Jackpot)" if rule.is_jackpot else ""
            return self.symbol_string(pattern.symbol) * 5 + indicator
        if isinstance(pattern, ThreeOfAKind):
            return self.symbol_string(pattern.symbol) * 3
        if isinstance(pattern, MinCountAnyDistribution):
            listed = ", ".join(self.symbol_string(s) for s in pattern.symbols)
            return f"{pattern.min_count}x any of [{listed}]"
        if isinstance(pattern, MinCount):
            return self.symbol_string(pattern.symbol) * pattern.min_count
        raise TypeError(f"Unknown pay pattern: {pattern!r}")

    def pay_table_embed(self) -> Embed:
        """The pay table as an embed; the jackpot row shows the current jackpot."""
        fields = tuple(
            EmbedField(
                name=self.pay_rule_title(rule),
                value=_format_number(self._rolling_jackpot)
                if rule.is_jackpot
                else str(rule.payout),
                inline=False,
            )
            for rule in self._pay_table
        )
        return Embed(
            title=f"Pay Table - {self.cost_per_play} Libcoin a Spin",
            color=EMBED_COLOR,
            footer="RTP: ~97%",
            fields=fields,
        )