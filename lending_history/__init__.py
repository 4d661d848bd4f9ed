"""Lending history — reconstructs a wallet's deposit, borrow and collateral history."""

__version__ = "0.1.0"
