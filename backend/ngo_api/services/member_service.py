"""
NGO Site Backend - Member Service (Lifecycle Controller)
========================================================

What:  Orchestrates upload intake results, the asset store and the member
       record store for create / update / delete.
Who:   Called by the /api/members route handlers.

Per-request flow:
    Received → Validated → Persisted → AssetReconciled → Responded
        └─ Rejected (ValidationError)    └─ Failed (StorageError)

    Create:  [store image] → create record(image_ref or null)
    Update:  fetch → validate fields → [store new image] → update record → [delete old image]
    Delete:  delete record → [delete the image it referenced]

Invariant:
    A record's image_ref always names an existing asset. Old assets are removed
    only after the record mutation has succeeded; removal failures are logged
    and the request still succeeds. When the record write fails after a new
    image was stored, that new image is removed again (best-effort).
"""

import logging
from typing import List, Optional

from ngo_api.exceptions import AssetStorageError
from ngo_api.schemas.member import MemberResponse
from ngo_api.services.asset_store import LocalAssetStore
from ngo_api.services.record_store import RecordStore
from ngo_api.services.upload_intake import ImageUpload, MemberSubmission, check_required_fields

logger = logging.getLogger(__name__)


class MemberService:
    """
    Business logic for member records with an attached image.

    Holds no per-request state; the stores are process-wide and passed in
    once at startup (see bootstrap.build_services).
    """

    def __init__(self, records: RecordStore, assets: LocalAssetStore):
        self.records = records
        self.assets = assets

    # ── Asset helpers ─────────────────────────────────────────────────────

    async def _store_image(self, image: ImageUpload) -> str:
        return await self.assets.store(image.content, image.filename, field_name=image.field_name)

    async def _discard_asset(self, asset_id: Optional[str], reason: str) -> None:
        """Delete an asset, logging instead of raising on failure."""
        if not asset_id:
            return
        try:
            await self.assets.delete(asset_id)
        except AssetStorageError as e:
            logger.warning("Could not delete %s asset %s: %s", reason, asset_id, e.message)

    # ── Queries ───────────────────────────────────────────────────────────

    async def list_members(self) -> List[MemberResponse]:
        records = await self.records.list_all()
        return [MemberResponse.model_validate(record) for record in records]

    async def get_member(self, member_id: str) -> MemberResponse:
        record = await self.records.get(member_id)
        return MemberResponse.model_validate(record)

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create_member(self, submission: MemberSubmission) -> MemberResponse:
        """
        Create a member, storing the submitted image first if there is one.

        Raises:
            ValidationError: missing name/position, empty or oversized image
            StorageError: asset write or record insert failed
        """
        asset_id: Optional[str] = None
        image_ref: Optional[str] = None
        if submission.image is not None:
            asset_id = await self._store_image(submission.image)
            image_ref = self.assets.public_url(asset_id)

        try:
            record = await self.records.create({**submission.fields, "image_ref": image_ref})
        except Exception:
            await self._discard_asset(asset_id, "orphaned")
            raise

        logger.info(
            "Member created: %s (image=%s)", record["id"], asset_id or "none"
        )
        return MemberResponse.model_validate(record)

    async def update_member(self, member_id: str, submission: MemberSubmission) -> MemberResponse:
        """
        Merge submitted fields into a member and swap its image if a new one came.

        Without a new image the stored image_ref is left untouched.

        Raises:
            NotFoundError: unknown member id
            ValidationError: blank name/position, empty or oversized image
            StorageError: asset write or record update failed
        """
        existing = await self.records.get(member_id)
        check_required_fields(submission.fields, partial=True)

        changes = dict(submission.fields)
        new_asset_id: Optional[str] = None
        if submission.image is not None:
            new_asset_id = await self._store_image(submission.image)
            changes["image_ref"] = self.assets.public_url(new_asset_id)

        try:
            record = await self.records.update(member_id, changes)
        except Exception:
            await self._discard_asset(new_asset_id, "orphaned")
            raise

        if new_asset_id is not None:
            old_asset_id = self.assets.asset_id_from_ref(existing.get("image_ref"))
            if old_asset_id and old_asset_id != new_asset_id:
                await self._discard_asset(old_asset_id, "replaced")

        logger.info(
            "Member updated: %s (fields=%s, image=%s)",
            member_id,
            sorted(submission.fields),
            new_asset_id or "unchanged",
        )
        return MemberResponse.model_validate(record)

    async def delete_member(self, member_id: str) -> None:
        """
        Delete a member, then its image.

        Raises:
            NotFoundError: unknown member id
            StorageError: record deletion failed (the image is kept)
        """
        deleted = await self.records.delete(member_id)
        await self._discard_asset(
            self.assets.asset_id_from_ref(deleted.get("image_ref")), "removed member's"
        )
        logger.info("Member deleted: %s", member_id)
