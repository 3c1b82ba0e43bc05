"""Async client for the Supabase Storage REST API.

Only the handful of endpoints the bot needs are wrapped: listing a folder,
uploading and removing objects, building public URLs and creating the
bucket on first deploy.  Every transport, HTTP status or payload error is
re-raised as :class:`StorageError` so callers have a single exception to
handle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Awaitable, Callable, List, Mapping, Optional, ParamSpec, TypeVar
from urllib.parse import quote

import httpx

from ..utils.retry import retry

logger = logging.getLogger(__name__)

# 10MB limit to conserve space on the free tier
DEFAULT_FILE_SIZE_LIMIT = 10 * 1024 * 1024
# stop paging a folder after this many requests
MAX_LIST_PAGES = 50


class StorageError(Exception):
    """Base error for blob store operations."""


class StorageNotConfigured(StorageError):
    """Raised by :class:`DisabledStore` when credentials are missing."""


@dataclass(frozen=True)
class ObjectMeta:
    name: str
    id: Optional[str] = None
    size: int = 0
    mimetype: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_json(cls, item: Mapping[str, Any]) -> "ObjectMeta":
        metadata = item.get("metadata") or {}
        return cls(
            name=str(item.get("name", "")),
            id=item.get("id"),
            size=int(metadata.get("size") or 0),
            mimetype=metadata.get("mimetype"),
            created_at=item.get("created_at"),
            updated_at=item.get("updated_at"),
        )

    @property
    def is_placeholder(self) -> bool:
        """Folder markers have no object id; dotfiles keep empty folders alive."""
        return (
            self.id is None
            or self.name.endswith("/")
            or self.name.startswith(".")
        )


P = ParamSpec("P")
T = TypeVar("T")


def translate_errors(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Translate httpx and payload errors into :class:`StorageError`."""

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except StorageError:
            raise
        except httpx.HTTPStatusError as exc:
            raise StorageError(
                f"{exc.request.method} {exc.request.url.path} -> {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise StorageError(str(exc) or exc.__class__.__name__) from exc
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise StorageError(f"unexpected storage payload: {exc}") from exc

    return wrapper


class StorageClient:
    """Thin wrapper around one storage bucket."""

    def __init__(
        self,
        base_url: str,
        key: str,
        bucket: str,
        *,
        timeout: float = 10.0,
        retries: int = 3,
        retry_delay: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.retries = retries
        self.retry_delay = retry_delay
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/storage/v1",
            headers={"apikey": key, "Authorization": f"Bearer {key}"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "StorageClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    def public_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{quote(path, safe='/')}"

    @translate_errors
    async def list(self, path: str, *, limit: int = 100, offset: int = 0) -> List[ObjectMeta]:
        """List the direct children of folder ``path``.

        Pages of ``limit`` objects are requested until a short page comes back.
        """

        limit = max(1, limit)
        objects: List[ObjectMeta] = []
        for _ in range(MAX_LIST_PAGES):
            page = await self._list_page(path, limit, offset)
            objects.extend(page)
            if len(page) < limit:
                return objects
            offset += limit
        logger.warning("listing %s stopped after %d pages", path, MAX_LIST_PAGES)
        return objects

    async def _list_page(self, path: str, limit: int, offset: int) -> List[ObjectMeta]:
        response = await retry(
            self._client.post,
            f"/object/list/{self.bucket}",
            json={
                "prefix": path.strip("/"),
                "limit": limit,
                "offset": offset,
                "sortBy": {"column": "name", "order": "asc"},
            },
            attempts=self.retries,
            base_delay=self.retry_delay,
            exceptions=(httpx.TransportError,),
            logger=logger,
        )
        response.raise_for_status()
        items = response.json()
        if not isinstance(items, list):
            raise StorageError(f"listing {path!r} returned {type(items).__name__}")
        for item in items:
            if not isinstance(item, Mapping):
                raise StorageError(f"listing {path!r} returned a {type(item).__name__} entry")
        return [ObjectMeta.from_json(item) for item in items]

    @translate_errors
    async def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str = "application/octet-stream",
        upsert: bool = False,
    ) -> ObjectMeta:
        response = await self._client.post(
            f"/object/{self.bucket}/{quote(path, safe='/')}",
            content=data,
            headers={
                "content-type": content_type,
                "cache-control": "max-age=3600",
                "x-upsert": "true" if upsert else "false",
            },
        )
        response.raise_for_status()
        payload = response.json() if response.content else {}
        return ObjectMeta(
            name=path.rsplit("/", 1)[-1],
            id=payload.get("Id") or payload.get("Key") or path,
            size=len(data),
            mimetype=content_type,
        )

    @translate_errors
    async def remove(self, path: str) -> None:
        response = await self._client.request(
            "DELETE", f"/object/{self.bucket}", json={"prefixes": [path]}
        )
        response.raise_for_status()

    @translate_errors
    async def list_buckets(self) -> List[str]:
        response = await self._client.get("/bucket")
        response.raise_for_status()
        return [item["name"] for item in response.json()]

    @translate_errors
    async def ensure_bucket(
        self, *, public: bool = True, file_size_limit: int = DEFAULT_FILE_SIZE_LIMIT
    ) -> bool:
        """Create the bucket if missing. Returns ``True`` when it was created."""

        if self.bucket in await self.list_buckets():
            logger.info("bucket %r already exists", self.bucket)
            return False
        response = await self._client.post(
            "/bucket",
            json={
                "id": self.bucket,
                "name": self.bucket,
                "public": public,
                "file_size_limit": file_size_limit,
            },
        )
        response.raise_for_status()
        logger.info("created bucket %r", self.bucket)
        return True


class DisabledStore:
    """Stand-in used when storage credentials are missing."""

    bucket = ""

    async def __aenter__(self) -> "DisabledStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def aclose(self) -> None:
        return None

    def public_url(self, path: str) -> str:
        return ""

    async def list(self, path: str, **_: Any) -> List[ObjectMeta]:
        raise StorageNotConfigured("storage is not configured")

    async def upload(self, path: str, data: bytes, **_: Any) -> ObjectMeta:
        raise StorageNotConfigured("storage is not configured")

    async def remove(self, path: str) -> None:
        raise StorageNotConfigured("storage is not configured")

    async def ensure_bucket(self, **_: Any) -> bool:
        raise StorageNotConfigured("storage is not configured")


def build_store(config: Any) -> StorageClient | DisabledStore:
    """Return a live client, or :class:`DisabledStore` in degraded mode."""

    if not config.storage_configured:
        return DisabledStore()
    return StorageClient(
        config.STORAGE_URL,
        config.STORAGE_KEY,
        config.STORAGE_BUCKET,
        timeout=config.STORAGE_TIMEOUT,
        retries=config.STORAGE_RETRIES,
    )


__all__ = [
    "StorageError",
    "StorageNotConfigured",
    "ObjectMeta",
    "StorageClient",
    "DisabledStore",
    "build_store",
    "translate_errors",
]
