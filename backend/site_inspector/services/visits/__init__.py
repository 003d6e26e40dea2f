from .dto import ChangeStatusIn, VisitOut
from .service import VisitService

__all__ = ["VisitService", "ChangeStatusIn", "VisitOut"]
