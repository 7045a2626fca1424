"""Offline toolkit for on-chain tape storage: addresses, accounts, instructions, tape encoding and reading."""

__version__ = "0.2.1"