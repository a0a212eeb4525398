from decimal import Decimal

from ninja import Schema
from pydantic import field_validator


class CertificateRecordIn(Schema):
    """
    Corps du POST /certificates. Champs en camelCase, tous optionnels ici:
    la présence et le format sont vérifiés par le service pour renvoyer {error}.
    """
    certId: str | None = None
    instituteAddress: str | None = None
    name: str | None = None
    studentId: str | None = None
    father: str | None = None
    mother: str | None = None
    degree: str | None = None
    department: str | None = None
    cgpa: str | None = None
    session: str | None = None
    createdAt: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def scalars_as_text(cls, v):
        # 3.8 -> "3.8", 1042 -> "1042"; bool is an int subclass and stays rejected
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v
