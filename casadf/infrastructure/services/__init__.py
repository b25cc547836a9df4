from .integrity_service import DeletionReport, IntegrityService
from .entity_service import EntityService
from .audit_trail_service import AuditTrailService
from .ledger_service import LedgerService

__all__ = [
    "DeletionReport",
    "IntegrityService",
    "EntityService",
    "AuditTrailService",
    "LedgerService",
]
