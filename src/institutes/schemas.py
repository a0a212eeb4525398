from ninja import Schema
from pydantic import field_validator


class InstituteCreatePayload(Schema):
    wallet: str
    name: str
    address: str = ""
    acronym: str = ""
    link: str = ""
    degrees: list[str] = []
    departments: list[str] = []

    @field_validator("degrees", "departments", mode="before")
    @classmethod
    def parse_names(cls, v):
        # "B.Sc, M.Sc" est accepté comme la saisie du formulaire
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return v


class NamesPayload(Schema):
    names: list[str]


class NamePayload(Schema):
    name: str


class InstitutePatchPayload(Schema):
    name: str | None = None
    address: str | None = None
    acronym: str | None = None
    link: str | None = None
