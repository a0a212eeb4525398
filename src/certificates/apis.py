import logging

from django.http import JsonResponse
from ninja_extra import ControllerBase, api_controller, route

from src.certificates import selectors, services
from src.certificates.presenters import record_to_dto
from src.certificates.schemas import CertificateRecordIn
from src.core.exceptions import DomainError

logger = logging.getLogger(__name__)


@api_controller("/certificates", tags=["Metadata cache"], auth=None)
class CertificateRecordController(ControllerBase):
    """
    Metadata cache. Bodies keep the {error} / {message, certificate} shape
    expected by existing issuers, not the envelope used elsewhere.
    """

    @route.post("")
    def create_certificate(self, payload: CertificateRecordIn):
        try:
            record = services.certificate_record_create(**payload.model_dump())
        except DomainError as e:
            return JsonResponse({"error": e.message}, status=e.status)
        except Exception as e:
            logger.exception("Error creating certificate record")
            return JsonResponse({"error": str(e)}, status=500)

        return JsonResponse(
            {"message": "Certificate created successfully!", "certificate": record_to_dto(record)},
            status=201,
        )

    @route.get("")
    def list_certificates(self):
        params = self.context.request.GET
        institute_address = (params.get("instituteAddress") or "").strip()
        student_id = (params.get("studentId") or "").strip() or None
        if not institute_address:
            return JsonResponse({"error": "instituteAddress is required"}, status=400)

        try:
            records = selectors.certificate_record_list(
                institute_address=institute_address, student_id=student_id
            )
            items = [record_to_dto(r) for r in records]
        except Exception as e:
            logger.exception("Error listing certificate records")
            return JsonResponse({"error": str(e)}, status=500)
        return JsonResponse(items, safe=False)

    @route.get("/{cert_id}")
    def get_certificate(self, cert_id: str):
        record = selectors.certificate_record_get(cert_id=cert_id)
        if record is None:
            return JsonResponse({"error": "Certificate not found"}, status=404)
        return JsonResponse(record_to_dto(record))
