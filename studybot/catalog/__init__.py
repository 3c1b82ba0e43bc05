from .types import (
    ORIGIN_CATALOG,
    ORIGIN_STORAGE,
    MATERIAL_TYPES,
    MATERIAL_LABELS,
    Branch,
    Subject,
    FileResource,
    ResourceBucket,
    normalize_material_type,
)
from .lookup import Catalog

__all__ = [
    "Catalog",
    "ORIGIN_CATALOG",
    "ORIGIN_STORAGE",
    "MATERIAL_TYPES",
    "MATERIAL_LABELS",
    "Branch",
    "Subject",
    "FileResource",
    "ResourceBucket",
    "normalize_material_type",
]
