"""
ImageKitClient - the external asset store.

Covers the two ImageKit operations the CMS needs:
- Bulk deletion of files by fileId (management API, private key auth)
- Upload authentication parameters for browser-side uploads

Uploads never pass through this server: the admin console asks
GET /api/upload-auth for a signed token and posts the file straight to
ImageKit, then submits the returned fileId/url with the resource.

Every failure talking to ImageKit surfaces as ExternalServiceError. Callers
that treat cleanup as best-effort catch it (see lifecycle.ImageCleanup).
"""

import hashlib
import hmac
import time
import uuid
from collections.abc import Sequence
from typing import Any, Protocol

import httpx
from loguru import logger

from ...errors import ExternalServiceError

# Lifetime of upload credentials, same default as the ImageKit SDKs
UPLOAD_AUTH_TTL_SECONDS = 60 * 30


class AssetStore(Protocol):
    """What the lifecycle layer needs from an image store."""

    async def bulk_delete(self, file_ids: Sequence[str]) -> None: ...


class ImageKitClient:
    """Async client for the ImageKit management API."""

    def __init__(
        self,
        public_key: str,
        private_key: str,
        url_endpoint: str,
        api_base_url: str = "https://api.imagekit.io",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize ImageKit client.

        Args:
            public_key: Public API key (safe to send to browsers)
            private_key: Private API key (server only)
            url_endpoint: Delivery URL endpoint
            api_base_url: Management API base URL
            timeout_seconds: Bound on every API call
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.public_key = public_key
        self.private_key = private_key
        self.url_endpoint = url_endpoint
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout_seconds)
        self.transport = transport

    @classmethod
    def from_settings(cls, imagekit_settings=None) -> "ImageKitClient":
        if imagekit_settings is None:
            from ...settings import settings

            imagekit_settings = settings.imagekit
        return cls(
            public_key=imagekit_settings.public_key,
            private_key=imagekit_settings.private_key,
            url_endpoint=imagekit_settings.url_endpoint,
            api_base_url=imagekit_settings.api_base_url,
            timeout_seconds=imagekit_settings.timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self.public_key and self.private_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.api_base_url,
            auth=(self.private_key, ""),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def bulk_delete(self, file_ids: Sequence[str]) -> None:
        """
        Delete files by fileId in one call.

        ImageKit answers 200 when everything was deleted and 207 when some
        ids were missing; missing ids are logged, not raised.

        Raises:
            ExternalServiceError: Keys missing, timeout, transport or HTTP error
        """
        if not file_ids:
            return
        if not self.private_key:
            raise ExternalServiceError("ImageKit private key is not configured")

        logger.info(f"Deleting {len(file_ids)} file(s) from ImageKit")
        try:
            async with self._client() as client:
                response = await client.post(
                    "/v1/files/batch/deleteByFileIds",
                    json={"fileIds": list(file_ids)},
                )
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ExternalServiceError(f"ImageKit bulk delete timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(
                f"ImageKit bulk delete failed with {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"ImageKit bulk delete failed: {e}") from e

        body = response.json() if response.content else {}
        missing = body.get("missingFileIds") or []
        if missing:
            logger.warning(f"ImageKit reported {len(missing)} missing file(s): {missing}")

    def upload_auth(self, token: str | None = None, expire: int | None = None) -> dict[str, Any]:
        """
        Signed parameters for a client-side upload.

        signature = HMAC-SHA1(private_key, token + expire), hex encoded.

        Raises:
            ExternalServiceError: Keys are not configured
        """
        if not self.configured:
            raise ExternalServiceError("Server configuration error: ImageKit keys missing")

        token = token or str(uuid.uuid4())
        expire = expire or int(time.time()) + UPLOAD_AUTH_TTL_SECONDS
        signature = hmac.new(
            self.private_key.encode("utf-8"),
            f"{token}{expire}".encode("utf-8"),
            hashlib.sha1,
        ).hexdigest()

        return {
            "token": token,
            "expire": expire,
            "signature": signature,
            "publicKey": self.public_key,
            "urlEndpoint": self.url_endpoint,
        }
