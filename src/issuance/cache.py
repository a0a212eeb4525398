"""
Clients for the metadata cache, as seen by the issuance coordinator.

HttpMetadataCache talks to a remote cache service over its REST surface.
LocalMetadataCache writes through this project's own ORM services.
"""
from __future__ import annotations

import logging
from typing import Protocol

import requests
from django.db import DatabaseError

from src.certificates import selectors, services
from src.certificates.presenters import record_to_dto
from src.core.exceptions import CachePersistenceError, DuplicateCertificateError, ValidationError

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = DuplicateCertificateError.default_message


class MetadataCache(Protocol):
    def find(self, *, institute_address: str, student_id: str) -> list[dict]:
        ...

    def insert(self, record: dict) -> dict:
        ...


class HttpMetadataCache:
    def __init__(self, base_url: str, *, session: requests.Session | None = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def find(self, *, institute_address: str, student_id: str) -> list[dict]:
        try:
            resp = self.session.get(
                f"{self.base_url}/certificates",
                params={"instituteAddress": institute_address.lower(), "studentId": student_id},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CachePersistenceError(f"Metadata cache unreachable: {e}") from e

        if resp.status_code != 200:
            raise CachePersistenceError(f"Metadata cache lookup failed ({resp.status_code}): {_error_of(resp)}")
        return resp.json()

    def insert(self, record: dict) -> dict:
        try:
            resp = self.session.post(f"{self.base_url}/certificates", json=record, timeout=self.timeout)
        except requests.RequestException as e:
            raise CachePersistenceError(f"Failed to save certificate to the metadata cache: {e}") from e

        if resp.status_code == 201:
            return resp.json().get("certificate", record)

        error = _error_of(resp)
        if resp.status_code == 400:
            if error == DUPLICATE_MESSAGE:
                raise DuplicateCertificateError()
            raise ValidationError(error)
        raise CachePersistenceError(f"Failed to save certificate to the metadata cache: {error}")


def _error_of(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason or ""
    if isinstance(body, dict):
        return body.get("error") or body.get("message") or ""
    return ""


class LocalMetadataCache:
    def find(self, *, institute_address: str, student_id: str) -> list[dict]:
        try:
            qs = selectors.certificate_record_list(institute_address=institute_address, student_id=student_id)
            return [record_to_dto(r) for r in qs]
        except DatabaseError as e:
            raise CachePersistenceError(f"Metadata cache lookup failed: {e}") from e

    def insert(self, record: dict) -> dict:
        try:
            return record_to_dto(services.certificate_record_create(**record))
        except DatabaseError as e:
            logger.exception("Metadata cache insert failed")
            raise CachePersistenceError(f"Failed to save certificate to the metadata cache: {e}") from e
