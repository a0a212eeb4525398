from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from src.chain import clients
from src.core.apis import BaseAPIController
from src.core.policies import ensure_staff
from src.issuance import services
from src.issuance.coordinator import StudentFields
from src.issuance.schemas import CertificateIssuePayload, ContentHashPayload


@api_controller("/issuance", tags=["Issuance"], auth=JWTAuth())
class IssuanceController(BaseAPIController):
    """
    Server-side issuance with the configured institute wallet.
    Errors raised by the coordinator are rendered by the global handlers.
    """

    @route.post("/certificates")
    def issue_certificate(self, payload: CertificateIssuePayload):
        request = self.context.request
        ensure_staff(request.auth)

        cert_id = services.certificate_issue(
            coordinator=services.coordinator_build(),
            student=StudentFields(
                name=payload.name,
                student_id=payload.student_id,
                father=payload.father,
                mother=payload.mother,
                cgpa=payload.cgpa,
                session=payload.session,
            ),
            degree=payload.degree,
            department=payload.department,
            content_hash=payload.content_hash,
            user=request.auth,
            request=request,
        )
        return self.create_response(message="Certificate generated", data={"cert_id": cert_id}, status_code=201)

    @route.post("/certificates/{cert_id}/revoke")
    def revoke_certificate(self, cert_id: str):
        request = self.context.request
        ensure_staff(request.auth)

        tx_hash = services.certificate_revoke(
            ledger=clients.get_ledger(),
            signer=clients.get_default_signer(),
            cert_id=cert_id,
            user=request.auth,
            request=request,
        )
        return self.create_response(message="Certificate revoked", data={"cert_id": cert_id, "tx_hash": tx_hash})

    @route.post("/certificates/{cert_id}/content-hash")
    def attach_content_hash(self, cert_id: str, payload: ContentHashPayload):
        request = self.context.request
        ensure_staff(request.auth)

        tx_hash = services.certificate_attach_content_hash(
            ledger=clients.get_ledger(),
            signer=clients.get_default_signer(),
            cert_id=cert_id,
            content_hash=payload.content_hash,
            user=request.auth,
            request=request,
        )
        return self.create_response(
            message="Content hash updated",
            data={"cert_id": cert_id, "content_hash": payload.content_hash, "tx_hash": tx_hash},
        )
