"""Wallet-connected funding of a fixed contract: session, simulation, submission."""

__version__ = "0.1.0"
