"""A weighted slot machine with a rolling jackpot, a Libcoin bank client and the game flow joining them."""

__version__ = "0.1.0"

__all__ = ["gore", "libcoin", "slot_machine", "slots"]