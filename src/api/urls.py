from ninja_extra import NinjaExtraAPI
from ninja_jwt.controller import NinjaJWTDefaultController

from src.api.exception_handler import attach_exception_handlers

from src.auditaction.apis import AuditActionController
from src.certificates.apis import CertificateRecordController
from src.institutes.apis import InstituteController
from src.issuance.apis import IssuanceController
from src.verification.apis import VerificationController


api = NinjaExtraAPI(title="Certificate Registry API", version="1.0.0", csrf=False)

# JWT Authentication
api.register_controllers(NinjaJWTDefaultController)

# Register exception handlers in one place
attach_exception_handlers(api)

api.register_controllers(
    CertificateRecordController,
    IssuanceController,
    VerificationController,
    InstituteController,
    AuditActionController,
)
