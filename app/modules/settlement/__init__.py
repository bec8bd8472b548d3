"""Purchase settlement exports"""

from .service import SettlementResult, SettlementService

__all__ = ["SettlementResult", "SettlementService"]
