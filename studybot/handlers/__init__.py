"""Convenience re-exports for handler callables."""

from .browse import browse_start, browse_callback, browse_handler, browse_callback_handler
from .upload import upload_handler, my_uploads_handler, delete_upload_handler
from .misc import version_handler
from .common import CATALOG_KEY, RESOLVER_KEY

__all__ = [
    "browse_start",
    "browse_callback",
    "browse_handler",
    "browse_callback_handler",
    "upload_handler",
    "my_uploads_handler",
    "delete_upload_handler",
    "version_handler",
    "CATALOG_KEY",
    "RESOLVER_KEY",
]
