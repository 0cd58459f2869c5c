"""Agreement lifecycle use cases."""

from .accept_agreement_use_case import AcceptAgreementUseCase
from .activate_agreement_use_case import ActivateAgreementUseCase
from .dtos import (
    AcceptAgreementResponse,
    ActivateAgreementResponse,
    AgreementStatusResponse,
)
from .get_agreement_status_use_case import GetAgreementStatusUseCase

__all__ = [
    "GetAgreementStatusUseCase",
    "AcceptAgreementUseCase",
    "ActivateAgreementUseCase",
    "AgreementStatusResponse",
    "AcceptAgreementResponse",
    "ActivateAgreementResponse",
]
