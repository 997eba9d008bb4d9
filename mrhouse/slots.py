"""Slot machine game flow: paying for spins, paying out winnings and stats."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from mrhouse.gore import generate_gore_slots
from mrhouse.libcoin import LibcoinError, TransactionRecord
from mrhouse.slot_machine import (
    EMBED_COLOR,
    Embed,
    EmbedField,
    PlayResult,
    SlotMachine,
    _format_number,
)

MR_HOUSE_ID = 1382600478206066769
DEDUCT_MESSAGE = "Playing the slot machine"
GRANT_MESSAGE = "Winning from the slot machine"
JACKPOT_THRESHOLD = 500

BANK_TROUBLE = "Sorry, looks like I'm having trouble contacting the bank."
WINNINGS_TROUBLE = (
    "Well this is embarassing. I wanted to give you your winnings but it looks "
    "like I'm having trouble contacting the bank."
)
NOT_ENOUGH = "You don't have enough libcoin to play the slot machine!"
NOT_PLAYED = "You haven't played the slot machine yet."


class _Bank(Protocol):
    async def get_balance(self, user_id: int) -> float: ...

    async def deduct(self, user_id: int, amount: float, message: str) -> None: ...

    async def grant(self, user_id: int, amount: float, message: str) -> None: ...

    async def get_user_transactions(self, user_id: int) -> list[TransactionRecord]: ...


class SlotsError(Exception):
    """A user-facing failure; ``embed`` holds a spin result that was already decided."""

    def __init__(self, message: str, embed: Embed | None = None) -> None:
        super().__init__(message)
        self.embed = embed


def build_result_embed(play_result: PlayResult) -> Embed:
    """The card showing the reels and the payout of a spin."""
    if play_result.payout >= JACKPOT_THRESHOLD:
        footer = "🎉 Jackpot! 🎉"
    elif play_result.payout > 0:
        footer = (
            "You won! Maybe next time you'll hit the jackpot!\n"
            f"Current Jackpot:{_format_number(play_result.current_jackpot_value)}"
        )
    else:
        footer = "Better luck next time!"
    return Embed(
        title="🎰 Slot Machine Results",
        color=EMBED_COLOR,
        footer=footer,
        fields=(
            EmbedField("Spin Result", "".join(play_result.symbols), False),
            EmbedField("Payout", str(play_result.payout), True),
        ),
    )


def build_stats_embed(transactions: Iterable[TransactionRecord]) -> Embed:
    """Totals spent and won on the slot machine."""
    records = list(transactions)
    spent = sum(r.amount for r in records if r.transaction_message == DEDUCT_MESSAGE)
    won = sum(r.amount for r in records if r.transaction_message == GRANT_MESSAGE)
    return Embed(
        title="🎰 Slot Machine Stats",
        color=EMBED_COLOR,
        fields=(
            EmbedField("Total Spent", f"{spent:.2f} libcoin", True),
            EmbedField("Total Won", f"{won:.2f} libcoin", True),
            EmbedField("Net Gain/Loss", f"{won - spent:.2f} libcoin", True),
        ),
    )


class SlotsGame:
    """Runs the slot machine against a bank."""

    def __init__(self, bank: _Bank, machine: SlotMachine | None = None) -> None:
        self.bank = bank
        self.machine = machine if machine is not None else generate_gore_slots()

    async def play(self, user_id: int, user_name: str) -> Embed:
        """Charge the user, spin, and pay out; returns the result card."""
        cost = float(self.machine.cost_per_play)
        if await self.bank.get_balance(user_id) < cost:
            raise SlotsError(NOT_ENOUGH)
        try:
            await self.bank.deduct(user_id, cost, DEDUCT_MESSAGE)
            await self.bank.grant(
                MR_HOUSE_ID, cost, f"Payment from {user_name} playing the slot machine"
            )
        except LibcoinError as exc:
            raise SlotsError(BANK_TROUBLE) from exc

        result = self.machine.play()
        embed = build_result_embed(result)
        try:
            await self.bank.grant(user_id, float(result.payout), GRANT_MESSAGE)
        except LibcoinError as exc:
            raise SlotsError(WINNINGS_TROUBLE, embed) from exc
        return embed

    def paytable(self) -> Embed:
        """The machine's pay table card."""
        return self.machine.pay_table_embed()

    async def stats(self, user_id: int) -> Embed | str:
        """The user's slot machine totals, or a note that they have not played."""
        try:
            transactions = await self.bank.get_user_transactions(user_id)
        except LibcoinError as exc:
            raise SlotsError(BANK_TROUBLE) from exc
        if not transactions:
            return NOT_PLAYED
        return build_stats_embed(transactions)

    async def balance_message(self, user_id: int) -> str:
        """A message stating the user's balance."""
        try:
            balance = await self.bank.get_balance(user_id)
        except LibcoinError as exc:
            raise SlotsError(f"Failed to get libcoin balance: {exc}") from exc
        return f"Your current libcoin balance is: **{_format_number(balance)}**"