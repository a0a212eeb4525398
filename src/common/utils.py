from __future__ import annotations

from web3 import Web3

from src.core.exceptions import ValidationError


def normalize_address(value: str | None) -> str:
    """Adresse de portefeuille en minuscules, sans espaces."""
    return (value or "").strip().lower()


def validate_wallet_address(value: str | None) -> str:
    """
    Return the EIP-55 checksum form of a wallet address.
    Raises ValidationError on anything that is not a 20-byte hex address.
    """
    raw = (value or "").strip()
    if not Web3.is_address(raw):
        raise ValidationError("Invalid wallet address (must be 0x...)", errors={"address": ["invalid"]})
    return Web3.to_checksum_address(raw)
