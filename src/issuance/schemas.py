from ninja import Schema
from pydantic import field_validator


class CertificateIssuePayload(Schema):
    name: str
    student_id: str
    father: str = ""
    mother: str = ""
    degree: str
    department: str
    cgpa: str = ""
    session: str = ""
    content_hash: str = ""

    @field_validator("name", "student_id", "father", "mother", "degree", "department", "cgpa", "session",
                     "content_hash")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()


class ContentHashPayload(Schema):
    content_hash: str

    @field_validator("content_hash")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content_hash is required")
        return v
