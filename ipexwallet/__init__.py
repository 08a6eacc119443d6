"""Core services of a desktop CryptoNote wallet: options, settings, amounts, payment ids and node selection."""

__version__ = "0.1.0"