from ninja_extra import api_controller, route

from src.core.apis import BaseAPIController
from src.verification.presenters import certificate_to_detail_dto, verification_to_dto
from src.verification.services import verification_flow_build
from src.verification.throttlers import VerificationRateThrottle


@api_controller("/verification", tags=["Verification"], auth=None, throttle=[VerificationRateThrottle()])
class VerificationController(BaseAPIController):

    @route.get("/{cert_id}")
    def verify_certificate(self, cert_id: str):
        """
        Ledger-only answer. A certificate that exists only in the metadata
        cache is reported as exists=false.
        """
        result = verification_flow_build().verify_certificate(cert_id)
        message = "Certificate found" if result.exists else "Certificate not found on the ledger"
        return self.create_response(message=message, data=verification_to_dto(result))

    @route.get("/{cert_id}/certificate")
    def get_certificate(self, cert_id: str):
        result = verification_flow_build().get_certificate(cert_id)
        return self.create_response(message="Certificate", data=certificate_to_detail_dto(result))
