# mrhouse

A five-reel slot machine with a rolling jackpot, plus an async client for a
Libcoin bank service that pays for spins and holds the winnings.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The slot machine

`mrhouse.gore.generate_gore_slots(previous_rolling_jackpot=0.0, rng=None)`
builds the standard machine. A spin costs 10 Libcoin. The jackpot starts at
500 and grows by 1% of the stake (0.1) on every spin that does not hit it. The
pay table is checked from the top down and the first match pays out:

| Pattern                                   | Payout  |
|-------------------------------------------|---------|
| five Gore                                 | jackpot |
| five Mean                                 | 250     |
| five Magnathonk                           | 250     |
| three or more Smugbrow                    | 25      |
| three or more Smileyes                    | 25      |
| two or more Smileyes                      | 6       |
| three or more of Smugbrow/Magnathonk/Mean | 6       |
| one or more Smileyes                      | 2       |

```python
import random

from mrhouse.gore import generate_gore_slots

machine = generate_gore_slots(previous_rolling_jackpot=0.0, rng=random.Random(7))
result = machine.play()
print(result.symbols, result.payout, result.current_jackpot_value)
```

If you pass a previous jackpot below the minimum, the machine starts at the
minimum. When the jackpot is hit it drops back to the minimum. The jackpot is
rounded to 8 decimal places after every spin.

You can build your own machine from `mrhouse.slot_machine.SlotMachine`,
`PayRule` and these patterns, each with a `matches(symbols)` method:

- `FiveOfAKind(symbol)`: every reel shows the symbol
- `ThreeOfAKind(symbol)`: at least three reels show the symbol
- `MinCount(symbol, min_count)`: at least `min_count` reels show the symbol
- `MinCountAnyDistribution(symbols, min_count)`: the listed symbols together
  appear at least `min_count` times

A pay table needs at least one jackpot rule (`is_jackpot=True`), otherwise
`SlotMachine` raises `ValueError`. The payout of the first jackpot rule is the
minimum jackpot. `generate_weighted_symbol_pool(weights)` turns a mapping of
`Symbol` to weight into the pool the reels draw from.

`SlotMachine` also has:

- `rolling_jackpot` and `min_jackpot` properties
- `symbol_string(symbol)`, the emoji text shown for a symbol
- `pay_rule_title(rule)`, a readable description of a rule
- `pay_table_embed()`, the pay table as a plain `Embed` (title, colour, footer
  and a tuple of `EmbedField`s) that a chat front end can show

## Playing against the bank

`mrhouse.libcoin.LibcoinClient(token, base_url, client=None)` talks to the bank
service and sends the token in an `ApiKey` header. It offers `get_balance`,
`deduct`, `grant` and `get_user_transactions`. The last one fetches every page
and drops duplicate ids. Failures are raised as `LibcoinError`. The client
works as an async context manager. `aclose()` closes the HTTP client only if it
created that client.

`mrhouse.slots.SlotsGame(bank, machine=None)` ties a bank to a machine. Without
a machine it uses the standard one.

```python
import asyncio

from mrhouse.gore import generate_gore_slots
from mrhouse.libcoin import LibcoinClient
from mrhouse.slots import SlotsError, SlotsGame


async def main() -> None:
    async with LibcoinClient(token="token", base_url="https://bank.example.com/libcoin") as bank:
        game = SlotsGame(bank, generate_gore_slots(0.0))
        try:
            print(await game.balance_message(42))
            embed = await game.play(42, "player")
            print(embed.title, [field.value for field in embed.fields])
            print(await game.stats(42))
        except SlotsError as err:
            print(err)


asyncio.run(main())
```

- `play(user_id, user_name)` checks the balance and deducts the stake. It
  grants the stake to the house, spins, pays out the winnings and returns the
  result card.
- `paytable()` returns the machine's pay table card.
- `stats(user_id)` returns a card with the totals spent, won and net. It
  returns a plain message instead if the user has no transactions.
- `balance_message(user_id)` returns a sentence giving the balance.

Every failure is raised as a `SlotsError` whose message can go straight to the
player. If paying out the winnings fails after the spin, the error's `embed`
attribute holds the spin's result card. `build_result_embed` and
`build_stats_embed` build the same cards from a `PlayResult` or a list of
`TransactionRecord`s.

## What this package does not do

It has no chat bot. Nothing here connects to a chat service or registers
commands; the cards are plain data for a front end to show. It does not store
the jackpot between runs either. To carry it over, read
`SlotMachine.rolling_jackpot` and pass it to `generate_gore_slots` next time.