"""
Dual-write issuance: metadata cache first, then the Certification ledger.

There is no compensation step. When the ledger write fails after the cache
insert, the cache row stays behind as an orphan (status PENDING) until the
reconciliation job marks it FAILED. Resubmitting the same student before
that hits DuplicateCertificateError.
"""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Callable

import structlog
from web3.exceptions import ContractLogicError, Web3Exception

from src.chain.gateway import revert_reason
from src.chain.signers import Signer
from src.core.exceptions import (
    ChainReadError,
    ChainWriteError,
    DuplicateCertificateError,
    InvalidReferenceError,
    ValidationError,
)
from src.issuance.cache import MetadataCache

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StudentFields:
    name: str
    student_id: str
    father: str = ""
    mother: str = ""
    cgpa: str = ""
    session: str = ""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(value: datetime) -> str:
    """2024-05-01T10:00:00.000Z, the shape JavaScript's toISOString() produces."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class IssuanceCoordinator:
    def __init__(self, cache: MetadataCache, registry, ledger, signer: Signer, *,
                 id_factory: Callable[[], uuid.UUID | str] = uuid.uuid4,
                 clock: Callable[[], datetime] = _utcnow):
        self.cache = cache
        self.registry = registry
        self.ledger = ledger
        self.signer = signer
        self.id_factory = id_factory
        self.clock = clock

    def issue_certificate(self, *, institute_address: str, student: StudentFields, degree_name: str,
                          department_name: str, content_hash: str = "") -> str:
        """
        Returns the new certId once the ledger transaction is confirmed.

        Raises, in order of the checks:
        ValidationError, InvalidReferenceError, ChainReadError (nothing written),
        DuplicateCertificateError, CachePersistenceError (nothing written),
        ChainWriteError (cache row left as orphan).
        """
        name = (student.name or "").strip()
        student_id = (student.student_id or "").strip()
        if not name or not student_id:
            raise ValidationError(
                "Name and Student ID are required",
                errors={k: ["required"] for k, v in (("name", name), ("student_id", student_id)) if not v},
            )

        try:
            institute = self.registry.get_institute(institute_address)
        except ContractLogicError as e:
            # Caller is not a registered institute
            raise InvalidReferenceError(extra={"reason": revert_reason(e)}) from e
        except (Web3Exception, OSError) as e:
            logger.warning("issuance_registry_unreachable", institute=institute_address.lower(), error=str(e))
            raise ChainReadError() from e
        degree_index = institute.degree_index(degree_name)
        department_index = institute.department_index(department_name)
        if degree_index is None or department_index is None:
            raise InvalidReferenceError()

        log = logger.bind(institute=institute_address.lower(), student_id=student_id)

        # Duplicate gate, also enforced server-side by the cache
        if self.cache.find(institute_address=institute_address, student_id=student_id):
            log.info("issuance_duplicate")
            raise DuplicateCertificateError()

        cert_id = str(self.id_factory())
        created_at = iso_timestamp(self.clock())
        fields = asdict(student) | {"name": name, "student_id": student_id}

        self.cache.insert({
            "certId": cert_id,
            "instituteAddress": institute_address.lower(),
            "name": name,
            "studentId": student_id,
            "father": fields["father"],
            "mother": fields["mother"],
            "degree": degree_name,
            "department": department_name,
            "cgpa": fields["cgpa"],
            "session": fields["session"],
            "createdAt": created_at,
        })
        log = log.bind(cert_id=cert_id)
        log.info("issuance_cache_written")

        try:
            tx_hash = self.ledger.generate_certificate(
                self.signer,
                cert_id=cert_id,
                name=name,
                student_id=student_id,
                father=fields["father"],
                mother=fields["mother"],
                degree_index=degree_index,
                department_index=department_index,
                cgpa=fields["cgpa"],
                session=fields["session"],
                created_at=created_at,
                content_hash=content_hash,
            )
        except ChainWriteError as e:
            log.warning("issuance_chain_failed", error=e.message, reason=e.reason, tx_hash=e.tx_hash)
            raise

        log.info("issuance_confirmed", tx_hash=tx_hash)
        return cert_id
