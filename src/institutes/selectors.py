from __future__ import annotations

from src.chain.types import Institute
from src.common.utils import validate_wallet_address
from src.core.exceptions import NotFoundError


def institute_list(*, registry) -> list[Institute]:
    return [registry.get_institute(addr) for addr in registry.list_institute_addresses()]


def institute_get(*, registry, address: str) -> Institute:
    wallet = validate_wallet_address(address)
    if not registry.is_institute(wallet):
        raise NotFoundError("Institute not registered", errors={"address": ["not registered"]})
    return registry.get_institute(wallet)
