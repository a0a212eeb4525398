"""
Shared test doubles for the chain and the metadata cache.

The doubles mirror the contracts' observable behaviour: institute lists are
plain Python lists (remove = splice), certificates are keyed by certId.
"""
from __future__ import annotations

import dataclasses
from types import SimpleNamespace as NS

import pytest

from src.chain.signers import SignerRejectedError
from src.chain.types import Institute, LedgerCertificate, LedgerVerification
from src.core.exceptions import ChainWriteError, DuplicateCertificateError

INSTITUTE_WALLET = "0x" + "ab" * 20
OTHER_WALLET = "0x" + "cd" * 20


class FakeSigner:
    def __init__(self, address: str = INSTITUTE_WALLET, reject: bool = False):
        self.address = address
        self.reject = reject
        self.signed = []

    def sign_transaction(self, tx):
        if self.reject:
            raise SignerRejectedError("User denied transaction signature.")
        self.signed.append(tx)
        return NS(raw_transaction=b"\x01raw")


class FakeRegistry:
    def __init__(self):
        self.institutes: dict[str, Institute] = {}
        self.reads = 0
        self.writes = []

    # helpers
    def register(self, wallet=INSTITUTE_WALLET, *, name="Test University", degrees=("General",),
                 departments=("Main",), address="1 Campus Road", acronym="TU", link="https://tu.example"):
        self.institutes[wallet.lower()] = Institute(
            wallet=wallet, name=name, address=address, acronym=acronym, link=link,
            degrees=tuple(degrees), departments=tuple(departments),
        )
        return self.institutes[wallet.lower()]

    def _replace(self, wallet, **changes):
        key = wallet.lower()
        self.institutes[key] = dataclasses.replace(self.institutes[key], **changes)
        return "0x" + "11" * 32

    # lectures
    def is_institute(self, wallet):
        return wallet.lower() in self.institutes

    def get_institute(self, wallet):
        self.reads += 1
        # The contract returns empty fields for unknown callers
        return self.institutes.get(wallet.lower()) or Institute(
            wallet=wallet, name="", address="", acronym="", link="", degrees=(), departments=()
        )

    def list_institute_addresses(self):
        return [i.wallet for i in self.institutes.values()]

    # écritures
    def add_institute(self, signer, *, wallet, name, address, acronym, link, degrees, departments):
        self.writes.append(("addInstitute", wallet))
        self.register(wallet, name=name, address=address, acronym=acronym, link=link,
                      degrees=degrees, departments=departments)
        return "0x" + "11" * 32

    def add_degrees(self, signer, names):
        inst = self.institutes[signer.address.lower()]
        self.writes.append(("addDegrees", list(names)))
        return self._replace(signer.address, degrees=inst.degrees + tuple(names))

    def update_degree(self, signer, index, name):
        degrees = list(self.institutes[signer.address.lower()].degrees)
        degrees[index] = name
        self.writes.append(("updateDegree", index, name))
        return self._replace(signer.address, degrees=tuple(degrees))

    def remove_degree(self, signer, index):
        degrees = list(self.institutes[signer.address.lower()].degrees)
        del degrees[index]
        self.writes.append(("removeDegree", index))
        return self._replace(signer.address, degrees=tuple(degrees))

    def clear_degrees(self, signer):
        self.writes.append(("clearDegrees",))
        return self._replace(signer.address, degrees=())

    def add_departments(self, signer, names):
        inst = self.institutes[signer.address.lower()]
        self.writes.append(("addDepartments", list(names)))
        return self._replace(signer.address, departments=inst.departments + tuple(names))

    def update_department(self, signer, index, name):
        departments = list(self.institutes[signer.address.lower()].departments)
        departments[index] = name
        self.writes.append(("updateDepartment", index, name))
        return self._replace(signer.address, departments=tuple(departments))

    def remove_department(self, signer, index):
        departments = list(self.institutes[signer.address.lower()].departments)
        del departments[index]
        self.writes.append(("removeDepartment", index))
        return self._replace(signer.address, departments=tuple(departments))

    def clear_departments(self, signer):
        self.writes.append(("clearDepartments",))
        return self._replace(signer.address, departments=())

    def update_name(self, signer, value):
        self.writes.append(("updateInstituteName", value))
        return self._replace(signer.address, name=value)

    def update_address(self, signer, value):
        self.writes.append(("updateInstituteAddress", value))
        return self._replace(signer.address, address=value)

    def update_acronym(self, signer, value):
        self.writes.append(("updateInstituteAcronym", value))
        return self._replace(signer.address, acronym=value)

    def update_link(self, signer, value):
        self.writes.append(("updateInstituteLink", value))
        return self._replace(signer.address, link=value)


class FakeLedger:
    def __init__(self):
        self.certificates: dict[str, LedgerCertificate] = {}
        self.writes = []
        self.fail_with: Exception | None = None

    def generate_certificate(self, signer, *, cert_id, name, student_id, father, mother, degree_index,
                             department_index, cgpa, session, created_at, content_hash=""):
        self.writes.append(("generateCertificate", cert_id))
        if self.fail_with is not None:
            raise self.fail_with
        try:
            signer.sign_transaction({"to": "ledger", "certId": cert_id})
        except SignerRejectedError as e:
            raise ChainWriteError("Transaction was rejected by the signer.", reason=str(e)) from e
        self.certificates[cert_id] = LedgerCertificate(
            cert_id=cert_id, name=name, student_id=student_id, father=father, mother=mother,
            degree_index=degree_index, department_index=department_index, cgpa=cgpa, session=session,
            created_at=created_at, revoked=False, content_hash=content_hash, issued_by=signer.address,
        )
        return "0x" + "22" * 32

    def revoke_certificate(self, signer, cert_id):
        self.writes.append(("revokeCertificate", cert_id))
        if cert_id not in self.certificates:
            raise ChainWriteError("Transaction reverted: Certificate does not exist", reason="Certificate does not exist")
        self.certificates[cert_id] = dataclasses.replace(self.certificates[cert_id], revoked=True)
        return "0x" + "33" * 32

    def update_content_hash(self, signer, cert_id, content_hash):
        self.writes.append(("updateCertificateIpfsHash", cert_id))
        if cert_id not in self.certificates:
            raise ChainWriteError("Transaction reverted: Certificate does not exist", reason="Certificate does not exist")
        self.certificates[cert_id] = dataclasses.replace(self.certificates[cert_id], content_hash=content_hash)
        return "0x" + "44" * 32

    def verify_certificate(self, cert_id, *, caller=None):
        cert = self.certificates.get(cert_id)
        if cert is None:
            return LedgerVerification(exists=False)
        return LedgerVerification(
            exists=True, valid=not cert.revoked, revoked=cert.revoked,
            has_content_hash=bool(cert.content_hash), content_hash=cert.content_hash,
        )

    def get_certificate(self, cert_id, *, caller=None):
        return self.certificates[cert_id]


class FakeCache:
    """In-memory MetadataCache with the same uniqueness gate as the service."""

    def __init__(self):
        self.records: list[dict] = []
        self.fail_with: Exception | None = None
        self.inserts = 0

    def _rows_for(self, institute_address, student_id):
        return [
            r for r in self.records
            if r["instituteAddress"] == institute_address.lower() and r["studentId"] == student_id
        ]

    def find(self, *, institute_address, student_id):
        return self._rows_for(institute_address, student_id)

    def insert(self, record):
        self.inserts += 1
        if self.fail_with is not None:
            raise self.fail_with
        if self._rows_for(record["instituteAddress"], record["studentId"]):
            raise DuplicateCertificateError()
        stored = dict(record, instituteAddress=record["instituteAddress"].lower())
        self.records.append(stored)
        return stored


@pytest.fixture
def signer():
    return FakeSigner()


@pytest.fixture
def registry():
    reg = FakeRegistry()
    reg.register(INSTITUTE_WALLET, degrees=("B.Sc", "M.Sc", "Ph.D"), departments=("CSE", "EEE"))
    return reg


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def cache():
    return FakeCache()

