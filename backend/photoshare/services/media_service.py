"""
PhotoShare Backend — Media Relay
==================================

What:  Forwards uploaded image bytes to the external media host (Cloudinary)
       and returns the durable public URL it assigns.
How:   Validates the upload locally (non-empty, size, extension), then POSTs a
       signed multipart request to the Cloudinary upload API with httpx.
Who:   Called by POST /upload before any Photo row is written.

Upload signing (Cloudinary "signed upload"):
    params    = {"folder": MEDIA_FOLDER, "timestamp": <unix seconds>}
    to_sign   = "folder=gallery&timestamp=1700000000"   (sorted, '&'-joined)
    signature = sha1(to_sign + api_secret).hexdigest()
    POST {MEDIA_API_BASE}/{cloud_name}/image/upload
         file, api_key, timestamp, folder, signature

Failure policy:
    Any transport error, non-2xx status or response without `secure_url`
    raises UploadError. There are no retries. The caller must not persist a
    Photo without a URL, so an UploadError leaves the database untouched.
"""

import hashlib
import logging
import time
from pathlib import Path
from typing import Dict, Optional

import httpx

from photoshare.config import settings
from photoshare.exceptions import UploadError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


def sign_params(params: Dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature: SHA-1 over sorted params plus the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class MediaRelay:
    """
    Client for the external object storage that hosts photo files.

    Every upload lands under one logical folder. The relay keeps no state
    between calls: each `store()` opens its own short-lived httpx client.
    """

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        folder: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            cloud_name/api_key/api_secret: Override settings (used in tests)
            folder: Logical folder on the media host
            transport: httpx transport override (tests pass httpx.MockTransport)
        """
        self.cloud_name = cloud_name if cloud_name is not None else settings.cloudinary_cloud_name
        self.api_key = api_key if api_key is not None else settings.cloudinary_api_key
        self.api_secret = api_secret if api_secret is not None else settings.cloudinary_api_secret
        self.folder = folder or settings.media_folder
        self._transport = transport

    @property
    def upload_url(self) -> str:
        return f"{settings.media_api_base}/{self.cloud_name}/image/upload"

    def validate(self, filename: str, content: bytes) -> None:
        """
        Reject uploads that should never reach the media host.

        Raises:
            ValidationError: empty file, too large, or unsupported extension (→ 400)
        """
        if not content:
            raise ValidationError(message="No file uploaded", field="photo")

        if len(content) > settings.max_file_size:
            max_mb = settings.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=f"File exceeds the maximum size of {max_mb:.0f}MB",
                field="photo",
                context={"size": len(content)},
            )

        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext or 'unknown'}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="photo",
                context={"extension": ext},
            )

    async def store(self, filename: str, content: bytes) -> str:
        """
        Upload a file and return its public URL.

        Raises:
            ValidationError: upload rejected locally (→ 400)
            UploadError: media host unreachable or refused the upload (→ 500)
        """
        self.validate(filename, content)

        if not (self.cloud_name and self.api_key and self.api_secret):
            raise UploadError(context={"reason": "media host credentials not configured"})

        params = {"folder": self.folder, "timestamp": str(int(time.time()))}
        data = {
            **params,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        files = {"file": (Path(filename).name, content)}

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=settings.media_upload_timeout,
            ) as client:
                response = await client.post(self.upload_url, data=data, files=files)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Media host rejected upload: %d %s",
                e.response.status_code,
                e.response.text[:200],
            )
            raise UploadError(context={"status": e.response.status_code})
        except httpx.HTTPError as e:
            logger.error("Media host unreachable: %s", str(e))
            raise UploadError(context={"error_type": type(e).__name__})
        except ValueError:
            logger.error("Media host returned a non-JSON body")
            raise UploadError(context={"reason": "invalid response body"})

        url = payload.get("secure_url") if isinstance(payload, dict) else None
        if not url:
            logger.error("Media host response has no secure_url")
            raise UploadError(context={"reason": "missing secure_url"})

        logger.info("Uploaded %s (%d bytes) to folder '%s'", filename, len(content), self.folder)
        return url


media_relay = MediaRelay()
