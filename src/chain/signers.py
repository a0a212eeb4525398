from __future__ import annotations

from typing import Any, Protocol

from eth_account import Account


class SignerRejectedError(Exception):
    """The signer refused to sign (user declined in the wallet, locked key, ...)."""


class Signer(Protocol):
    """
    Capability qui signe les transactions pour le compte d'un portefeuille.
    Injected explicitly into the gateway callers instead of an ambient wallet.
    """

    address: str

    def sign_transaction(self, tx: dict[str, Any]) -> Any:
        ...


class LocalAccountSigner:
    """Signs with a private key held by the server (OpenBao / env)."""

    def __init__(self, private_key: str):
        self._account = Account.from_key(private_key)
        self.address = self._account.address

    def sign_transaction(self, tx: dict[str, Any]):
        return self._account.sign_transaction(tx)

    def __repr__(self) -> str:
        return f"LocalAccountSigner({self.address})"
