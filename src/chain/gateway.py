"""
Typed adapters over the Institution and Certification contracts.

Reads are plain `call()`s. Writes go through `send_transaction`, which builds,
signs with the injected signer, broadcasts and waits for the receipt.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from src.chain.abi import CERTIFICATION_ABI, INSTITUTION_ABI
from src.chain.signers import Signer, SignerRejectedError
from src.chain.types import Institute, LedgerCertificate, LedgerVerification
from src.core.exceptions import ChainWriteError

logger = logging.getLogger(__name__)

DEFAULT_GAS_LIMIT = 500000
DEFAULT_RECEIPT_TIMEOUT = 600


def revert_reason(exc: Exception) -> str:
    message = getattr(exc, "message", None) or str(exc)
    prefix = "execution reverted:"
    if message.startswith(prefix):
        message = message[len(prefix):]
    return message.strip()


def send_transaction(w3: Web3, signer: Signer, fn_call, *, gas_limit: int = DEFAULT_GAS_LIMIT,
                     receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT) -> str:
    """
    Build, sign, broadcast and confirm one contract call. Returns the tx hash (hex).
    Every failure before confirmation surfaces as ChainWriteError.
    """
    try:
        tx = fn_call.build_transaction({
            "from": signer.address,
            "chainId": w3.eth.chain_id,
            "gas": gas_limit,
            "gasPrice": w3.eth.gas_price,
            "nonce": w3.eth.get_transaction_count(signer.address),
        })
    except ContractLogicError as e:
        reason = revert_reason(e)
        raise ChainWriteError(f"Transaction reverted: {reason}", reason=reason) from e
    except (Web3Exception, ValueError, OSError) as e:
        raise ChainWriteError(f"Transaction could not be built: {e}", reason=str(e)) from e

    try:
        signed = signer.sign_transaction(tx)
    except SignerRejectedError as e:
        raise ChainWriteError("Transaction was rejected by the signer.", reason=str(e) or "rejected") from e

    try:
        tx_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
    except ContractLogicError as e:
        reason = revert_reason(e)
        raise ChainWriteError(f"Transaction reverted: {reason}", reason=reason) from e
    except (Web3Exception, ValueError, OSError) as e:
        raise ChainWriteError(f"Transaction could not be broadcast: {e}", reason=str(e)) from e

    tx_hex = Web3.to_hex(tx_hash)
    logger.info("Transaction sent", extra={"tx_hash": tx_hex, "from": signer.address})

    try:
        receipt = w3.eth.wait_for_transaction_receipt(tx_hash, timeout=receipt_timeout)
    except TimeExhausted as e:
        # Broadcast transactions cannot be cancelled; it may still be mined.
        raise ChainWriteError("Transaction was not confirmed in time.", tx_hash=tx_hex) from e

    if receipt["status"] == 0:
        raise ChainWriteError("Transaction failed (reverted on chain).", reason="reverted", tx_hash=tx_hex)

    return tx_hex


class _ContractGateway:
    abi: list[dict[str, Any]] = []

    def __init__(self, w3: Web3, contract_address: str, *, gas_limit: int = DEFAULT_GAS_LIMIT,
                 receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT):
        self.w3 = w3
        self.contract = w3.eth.contract(address=Web3.to_checksum_address(contract_address), abi=self.abi)
        self.gas_limit = gas_limit
        self.receipt_timeout = receipt_timeout

    def _transact(self, signer: Signer, fn_call) -> str:
        return send_transaction(self.w3, signer, fn_call, gas_limit=self.gas_limit,
                                receipt_timeout=self.receipt_timeout)


class CertificationLedger(_ContractGateway):
    abi = CERTIFICATION_ABI

    def generate_certificate(self, signer: Signer, *, cert_id: str, name: str, student_id: str, father: str,
                             mother: str, degree_index: int, department_index: int, cgpa: str, session: str,
                             created_at: str, content_hash: str = "") -> str:
        fn = self.contract.functions.generateCertificate(
            cert_id, name, student_id, father, mother, degree_index, department_index,
            cgpa, session, created_at, content_hash,
        )
        return self._transact(signer, fn)

    def revoke_certificate(self, signer: Signer, cert_id: str) -> str:
        return self._transact(signer, self.contract.functions.revokeCertificate(cert_id))

    def update_content_hash(self, signer: Signer, cert_id: str, content_hash: str) -> str:
        return self._transact(signer, self.contract.functions.updateCertificateIpfsHash(cert_id, content_hash))

    def verify_certificate(self, cert_id: str, *, caller: str | None = None) -> LedgerVerification:
        try:
            exists, valid, revoked, has_ipfs, ipfs_hash = self.contract.functions.verifyCertificate(cert_id).call(
                _call_opts(caller)
            )
        except ContractLogicError:
            # Some deployments revert instead of returning exists=false
            return LedgerVerification(exists=False)
        return LedgerVerification(exists=exists, valid=valid, revoked=revoked,
                                  has_content_hash=has_ipfs, content_hash=ipfs_hash)

    def get_certificate(self, cert_id: str, *, caller: str | None = None) -> LedgerCertificate:
        row = self.contract.functions.getCertificate(cert_id).call(_call_opts(caller))
        (name, student_id, father, mother, degree_index, department_index,
         cgpa, session, created_at, revoked, ipfs_hash, issued_by) = row
        return LedgerCertificate(
            cert_id=cert_id,
            name=name,
            student_id=student_id,
            father=father,
            mother=mother,
            degree_index=int(degree_index),
            department_index=int(department_index),
            cgpa=cgpa,
            session=session,
            created_at=created_at,
            revoked=revoked,
            content_hash=ipfs_hash,
            issued_by=issued_by,
        )


class InstitutionRegistry(_ContractGateway):
    abi = INSTITUTION_ABI

    # Lectures
    def is_institute(self, wallet: str) -> bool:
        return self.contract.functions.checkInstitutePermission(Web3.to_checksum_address(wallet)).call()

    def get_institute(self, wallet: str) -> Institute:
        # getInstituteData() is keyed on msg.sender
        checksum = Web3.to_checksum_address(wallet)
        name, address, acronym, link, degrees, departments = (
            self.contract.functions.getInstituteData().call({"from": checksum})
        )
        return Institute(
            wallet=checksum,
            name=name,
            address=address,
            acronym=acronym,
            link=link,
            degrees=tuple(degrees),
            departments=tuple(departments),
        )

    def list_institute_addresses(self) -> list[str]:
        count = self.contract.functions.getInstituteCount().call()
        return [self.contract.functions.instituteAddresses(i).call() for i in range(count)]

    # Écritures
    def add_institute(self, signer: Signer, *, wallet: str, name: str, address: str, acronym: str, link: str,
                      degrees: Iterable[str], departments: Iterable[str]) -> str:
        fn = self.contract.functions.addInstitute(
            Web3.to_checksum_address(wallet), name, address, acronym, link, list(degrees), list(departments),
        )
        return self._transact(signer, fn)

    def add_degrees(self, signer: Signer, names: Iterable[str]) -> str:
        return self._transact(signer, self.contract.functions.addDegrees(list(names)))

    def update_degree(self, signer: Signer, index: int, name: str) -> str:
        return self._transact(signer, self.contract.functions.updateDegree(index, name))

    def remove_degree(self, signer: Signer, index: int) -> str:
        return self._transact(signer, self.contract.functions.removeDegree(index))

    def clear_degrees(self, signer: Signer) -> str:
        return self._transact(signer, self.contract.functions.clearDegrees())

    def add_departments(self, signer: Signer, names: Iterable[str]) -> str:
        return self._transact(signer, self.contract.functions.addDepartments(list(names)))

    def update_department(self, signer: Signer, index: int, name: str) -> str:
        return self._transact(signer, self.contract.functions.updateDepartment(index, name))

    def remove_department(self, signer: Signer, index: int) -> str:
        return self._transact(signer, self.contract.functions.removeDepartment(index))

    def clear_departments(self, signer: Signer) -> str:
        return self._transact(signer, self.contract.functions.clearDepartments())

    def update_name(self, signer: Signer, value: str) -> str:
        return self._transact(signer, self.contract.functions.updateInstituteName(value))

    def update_address(self, signer: Signer, value: str) -> str:
        return self._transact(signer, self.contract.functions.updateInstituteAddress(value))

    def update_acronym(self, signer: Signer, value: str) -> str:
        return self._transact(signer, self.contract.functions.updateInstituteAcronym(value))

    def update_link(self, signer: Signer, value: str) -> str:
        return self._transact(signer, self.contract.functions.updateInstituteLink(value))


def _call_opts(caller: str | None) -> dict[str, Any]:
    return {"from": Web3.to_checksum_address(caller)} if caller else {}
