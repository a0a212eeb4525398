from __future__ import annotations

from dataclasses import dataclass, field


def _first_index(items: tuple[str, ...], name: str) -> int | None:
    # Linear search, first match wins when a name appears twice.
    for idx, item in enumerate(items):
        if item == name:
            return idx
    return None


def _item_at(items: tuple[str, ...], index: int) -> str | None:
    if 0 <= index < len(items):
        return items[index]
    return None


@dataclass(frozen=True)
class Institute:
    wallet: str
    name: str
    address: str
    acronym: str
    link: str
    degrees: tuple[str, ...] = field(default_factory=tuple)
    departments: tuple[str, ...] = field(default_factory=tuple)

    def degree_index(self, name: str) -> int | None:
        return _first_index(self.degrees, name)

    def department_index(self, name: str) -> int | None:
        return _first_index(self.departments, name)

    def degree_at(self, index: int) -> str | None:
        """Current name stored at `index`; None when the list no longer reaches it."""
        return _item_at(self.degrees, index)

    def department_at(self, index: int) -> str | None:
        return _item_at(self.departments, index)


@dataclass(frozen=True)
class LedgerVerification:
    exists: bool
    valid: bool = False
    revoked: bool = False
    has_content_hash: bool = False
    content_hash: str = ""


@dataclass(frozen=True)
class LedgerCertificate:
    cert_id: str
    name: str
    student_id: str
    father: str
    mother: str
    degree_index: int
    department_index: int
    cgpa: str
    session: str
    created_at: str
    revoked: bool
    content_hash: str
    issued_by: str
