from types import SimpleNamespace as NS

from src.certificates.presenters import record_to_dto


def make_record(**kw):
    defaults = dict(
        id="rec-uuid",
        cert_id="cert-1",
        institute_address="0xabc",
        name="Ada",
        student_id="S1",
        father="",
        mother="",
        degree="B.Sc",
        department="CSE",
        cgpa="3.9",
        session="2020-2024",
        issued_at="2024-05-01T10:00:00.000Z",
        status="PENDING",
    )
    defaults.update(kw)
    return NS(**defaults)


def test_record_to_dto_uses_wire_names():
    dto = record_to_dto(make_record())
    assert dto["certId"] == "cert-1"
    assert dto["instituteAddress"] == "0xabc"
    assert dto["studentId"] == "S1"
    assert dto["createdAt"] == "2024-05-01T10:00:00.000Z"
    assert "issued_at" not in dto
