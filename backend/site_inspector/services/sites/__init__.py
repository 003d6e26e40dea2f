from .dto import SiteOut
from .service import SiteService

__all__ = ["SiteService", "SiteOut"]
