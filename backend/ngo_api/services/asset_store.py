"""
NGO Site Backend - Asset Store
==============================

What:  Stores member images on the local filesystem and maps them to public
       URLs.
How:   Every upload is written under a freshly generated name,
       `<field>-<unix-ms>-<9-digit random>.<ext>`, with exclusive-create so
       an existing asset is never overwritten.
Who:   MemberService (store on create/update, delete on replace/remove) and
       the `/uploads/{filename}` route (path_for).

Asset identifiers vs. references:
    asset_id   image-1718000000000-482913377.png   (filename in UPLOAD_DIR)
    image_ref  http://localhost:8000/uploads/image-1718000000000-482913377.png

    Records store the reference; `asset_id_from_ref()` recovers the id when a
    stale asset has to be removed. References that do not point into this
    store (an external URL typed in by hand) are never deleted.

Directory Structure:
    uploads/
    ├── image-1718000000000-482913377.png
    └── image-1718000123456-019283746.jpg
"""

import logging
import os
import re
import secrets
import time
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import aiofiles
import aiofiles.os

from ngo_api.exceptions import AssetStorageError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Fixed path prefix under which assets are served
UPLOADS_PREFIX = "/uploads"

# Extensions kept in generated names: short and alphanumeric only
_EXTENSION_RE = re.compile(r"^\.[a-z0-9]{1,10}$")

# Name regeneration attempts before giving up on exclusive-create
_MAX_NAME_ATTEMPTS = 5


class LocalAssetStore:
    """
    Filesystem-backed asset store.

    Lifecycle of an asset:
        1. MemberService hands over bytes + original filename → store()
        2. Size check (empty and oversized uploads are rejected)
        3. Unique name generated, file written with mode "xb"
        4. public_url(asset_id) becomes the record's imageRef
        5. When the record drops the reference → delete(asset_id)
    """

    def __init__(self, upload_dir: str, public_base_url: str, max_file_size: int):
        self.upload_dir = Path(upload_dir).resolve()
        self.public_base_url = public_base_url.rstrip("/")
        self._public_netloc = urlparse(self.public_base_url).netloc.lower()
        self.max_file_size = max_file_size
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Asset store initialized at %s", self.upload_dir)

    # ── Naming ────────────────────────────────────────────────────────────

    @staticmethod
    def _extension(original_name: str) -> str:
        ext = Path(original_name or "").suffix.lower()
        return ext if _EXTENSION_RE.match(ext) else ""

    def generate_asset_id(self, original_name: str, field_name: str = "image") -> str:
        """
        Build `<field>-<timestamp>-<random>.<ext>`.

        Timestamp is milliseconds since the epoch; the random suffix is a
        zero-padded 9-digit number.
        """
        timestamp = int(time.time() * 1000)
        suffix = secrets.randbelow(1_000_000_000)
        return f"{field_name}-{timestamp}-{suffix:09d}{self._extension(original_name)}"

    def _validate_size(self, content: bytes) -> None:
        if not content:
            raise ValidationError(message="Uploaded image is empty", field="image")
        if len(content) > self.max_file_size:
            max_mb = self.max_file_size / (1024 * 1024)
            raise ValidationError(
                message=(
                    f"Image size ({len(content) / (1024 * 1024):.1f}MB) "
                    f"exceeds maximum of {max_mb:.1f}MB."
                ),
                field="image",
                context={"max_size": self.max_file_size, "actual_size": len(content)},
            )

    # ── Store / Delete ────────────────────────────────────────────────────

    async def store(self, content: bytes, original_name: str, field_name: str = "image") -> str:
        """
        Persist bytes under a new unique name and return the asset id.

        Raises:
            ValidationError: empty or oversized content
            AssetStorageError: directory missing, disk full, permission denied
        """
        self._validate_size(content)

        for _ in range(_MAX_NAME_ATTEMPTS):
            asset_id = self.generate_asset_id(original_name, field_name)
            path = self.upload_dir / asset_id
            try:
                async with aiofiles.open(path, "xb") as f:
                    await f.write(content)
            except FileExistsError:
                logger.debug("Asset name collision on %s, regenerating", asset_id)
                continue
            except OSError as e:
                logger.error("Failed to store asset at %s: %s", path, str(e))
                raise AssetStorageError(
                    message=f"Failed to save uploaded image: {e.strerror or e}",
                    context={"path": str(path)},
                )
            logger.info("Asset stored: %s (%d bytes)", asset_id, len(content))
            return asset_id

        raise AssetStorageError(
            message="Could not allocate a unique name for the uploaded image",
            context={"attempts": _MAX_NAME_ATTEMPTS},
        )

    async def delete(self, asset_id: str) -> None:
        """
        Remove an asset. A missing asset is not an error.

        Raises:
            AssetStorageError: the file exists but could not be removed
        """
        try:
            path = self.path_for(asset_id)
        except NotFoundError:
            logger.debug("Delete skipped, not a valid asset id: %s", asset_id)
            return

        try:
            await aiofiles.os.remove(path)
            logger.info("Asset deleted: %s", asset_id)
        except FileNotFoundError:
            logger.debug("Asset already gone: %s", asset_id)
        except OSError as e:
            raise AssetStorageError(
                message=f"Failed to delete image {asset_id}: {e.strerror or e}",
                context={"asset_id": asset_id},
            )

    # ── Addressing ────────────────────────────────────────────────────────

    def public_url(self, asset_id: str) -> str:
        return f"{self.public_base_url}{UPLOADS_PREFIX}/{asset_id}"

    def asset_id_from_ref(self, image_ref: Optional[str]) -> Optional[str]:
        """
        Recover the asset id from a stored imageRef.

        Accepts relative paths under /uploads/ and absolute URLs on the host of
        PUBLIC_BASE_URL. Returns None when the reference does not name an
        asset of this store.
        """
        if not image_ref:
            return None
        parsed = urlparse(image_ref)
        if parsed.netloc and parsed.netloc.lower() != self._public_netloc:
            return None
        path = parsed.path
        if not path.startswith("/"):
            path = "/" + path
        prefix = UPLOADS_PREFIX + "/"
        if not path.startswith(prefix):
            return None
        asset_id = path[len(prefix):]
        if not asset_id or "/" in asset_id:
            return None
        return asset_id

    def path_for(self, asset_id: str) -> Path:
        """
        Resolve an asset id to its file inside the upload directory.

        Raises:
            NotFoundError: the id contains path components or escapes the
                upload directory
        """
        if (
            not asset_id
            or asset_id in {".", ".."}
            or "/" in asset_id
            or "\\" in asset_id
            or os.sep in asset_id
        ):
            raise NotFoundError(resource="image", resource_id=asset_id)
        path = (self.upload_dir / asset_id).resolve()
        if path.parent != self.upload_dir:
            raise NotFoundError(resource="image", resource_id=asset_id)
        return path

    def exists(self, asset_id: str) -> bool:
        try:
            return self.path_for(asset_id).is_file()
        except NotFoundError:
            return False

    def check_writable(self) -> bool:
        """Health probe: the upload directory exists and accepts writes."""
        return self.upload_dir.is_dir() and os.access(self.upload_dir, os.W_OK)
