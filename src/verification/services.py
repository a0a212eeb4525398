from src.chain import clients
from src.verification.flow import VerificationFlow


def verification_flow_build() -> VerificationFlow:
    # Lecture seule: aucun signataire côté serveur
    return VerificationFlow(ledger=clients.get_ledger(), registry=clients.get_registry())
