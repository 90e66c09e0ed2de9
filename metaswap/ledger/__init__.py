"""Ledgers and execution substrate the pools run on."""

from metaswap.ledger.host import Host, Journaled
from metaswap.ledger.interfaces import BasePool, ShareLedger, TransferableToken
from metaswap.ledger.tokens import LPToken, Token

__all__ = [
    "Host",
    "Journaled",
    "BasePool",
    "ShareLedger",
    "TransferableToken",
    "Token",
    "LPToken",
]
