"""Route optimization backend integration."""

from .client import OptimizerAPIError, OptimizerClient, check_health
from .service import UploadError, optimize_route, parse_upload, to_domain

__all__ = [
    "OptimizerAPIError",
    "OptimizerClient",
    "UploadError",
    "check_health",
    "optimize_route",
    "parse_upload",
    "to_domain",
]
