from __future__ import annotations

from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from web3 import Web3

from src.chain.gateway import CertificationLedger, InstitutionRegistry
from src.chain.signers import LocalAccountSigner, Signer


@lru_cache(maxsize=1)
def get_web3() -> Web3:
    w3 = Web3(Web3.HTTPProvider(settings.CHAIN_RPC_URL, request_kwargs={"timeout": settings.CHAIN_RPC_TIMEOUT}))
    return w3


def _gateway_kwargs() -> dict:
    return {
        "gas_limit": settings.CHAIN_GAS_LIMIT,
        "receipt_timeout": settings.CHAIN_RECEIPT_TIMEOUT,
    }


def get_registry() -> InstitutionRegistry:
    if not settings.INSTITUTION_CONTRACT_ADDRESS:
        raise ImproperlyConfigured("INSTITUTION_CONTRACT_ADDRESS is not configured")
    return InstitutionRegistry(get_web3(), settings.INSTITUTION_CONTRACT_ADDRESS, **_gateway_kwargs())


def get_ledger() -> CertificationLedger:
    if not settings.CERTIFICATION_CONTRACT_ADDRESS:
        raise ImproperlyConfigured("CERTIFICATION_CONTRACT_ADDRESS is not configured")
    return CertificationLedger(get_web3(), settings.CERTIFICATION_CONTRACT_ADDRESS, **_gateway_kwargs())


def get_default_signer() -> Signer:
    """
    Server-held wallet used by the JWT-protected write endpoints.
    The key is resolved through env_get (env first, then OpenBao).
    """
    key = settings.CHAIN_SIGNER_PRIVATE_KEY
    if not key:
        raise ImproperlyConfigured("CHAIN_SIGNER_PRIVATE_KEY is not configured")
    return LocalAccountSigner(key)
