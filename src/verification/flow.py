"""
Authenticity checks against the Certification ledger only.

The metadata cache is never consulted here: a cache row without a ledger
entry (orphan) must read as exists=False.
"""
from __future__ import annotations

from dataclasses import dataclass

import structlog
from web3.exceptions import ContractLogicError, Web3Exception

from src.chain.signers import Signer
from src.chain.types import Institute
from src.core.exceptions import ChainReadError, NotFoundError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CertificateVerification:
    cert_id: str
    exists: bool
    valid: bool = False
    revoked: bool = False
    content_hash: str = ""
    name: str = ""
    student_id: str = ""
    father: str = ""
    mother: str = ""
    cgpa: str = ""
    session: str = ""
    created_at: str = ""
    degree_index: int | None = None
    department_index: int | None = None
    # Noms résolus dans les listes *actuelles* de l'institut (None hors bornes)
    degree: str | None = None
    department: str | None = None
    institute_address: str = ""
    institute_name: str = ""
    institute_acronym: str = ""
    institute_link: str = ""


class VerificationFlow:
    def __init__(self, ledger, registry, signer: Signer | None = None):
        self.ledger = ledger
        self.registry = registry
        self.signer = signer

    @property
    def caller(self) -> str | None:
        return self.signer.address if self.signer is not None else None

    def _issuer(self, wallet: str) -> Institute:
        try:
            return self.registry.get_institute(wallet)
        except ContractLogicError:
            # Issuer removed or unreadable: the certificate stays authentic, names stay unresolved
            logger.info("verification_issuer_unavailable", institute=wallet)
            return Institute(wallet=wallet, name="", address="", acronym="", link="")

    def verify_certificate(self, cert_id: str) -> CertificateVerification:
        try:
            status = self.ledger.verify_certificate(cert_id, caller=self.caller)
            if not status.exists:
                return CertificateVerification(cert_id=cert_id, exists=False)
            cert = self.ledger.get_certificate(cert_id, caller=self.caller)
            institute = self._issuer(cert.issued_by)
        except (Web3Exception, OSError) as e:
            logger.warning("verification_chain_unreachable", cert_id=cert_id, error=str(e))
            raise ChainReadError() from e

        return CertificateVerification(
            cert_id=cert_id,
            exists=True,
            valid=status.valid,
            revoked=status.revoked,
            content_hash=status.content_hash if status.has_content_hash else "",
            name=cert.name,
            student_id=cert.student_id,
            father=cert.father,
            mother=cert.mother,
            cgpa=cert.cgpa,
            session=cert.session,
            created_at=cert.created_at,
            degree_index=cert.degree_index,
            department_index=cert.department_index,
            degree=institute.degree_at(cert.degree_index),
            department=institute.department_at(cert.department_index),
            institute_address=cert.issued_by,
            institute_name=institute.name,
            institute_acronym=institute.acronym,
            institute_link=institute.link,
        )

    def get_certificate(self, cert_id: str) -> CertificateVerification:
        result = self.verify_certificate(cert_id)
        if not result.exists:
            raise NotFoundError("Certificate not found", errors={"cert_id": ["not found"]})
        return result
