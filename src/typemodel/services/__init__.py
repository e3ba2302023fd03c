"""Service layer — loads documents from disk and answers resolution queries.

INVARIANT: All service-layer methods return ServiceResult.
"""

from typemodel.services.model import ModelService
from typemodel.services.result import ServiceError, ServiceResult

__all__ = ["ModelService", "ServiceError", "ServiceResult"]
