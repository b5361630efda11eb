"""
Service Layer - ManifestService and its result model.
"""

from kushn.services.manifest_models import ManifestResult
from kushn.services.manifest_service import ManifestService, create_manifest_service

__all__ = [
    "ManifestResult",
    "ManifestService",
    "create_manifest_service",
]
