"""
NGO Site Backend - Member Route Handlers
========================================

What:  /api/members CRUD. Create and update take multipart form data with an
       optional `image` file; list/get/delete take no body.
How:   Form parsing is done by services/upload_intake.py, the image and
       record bookkeeping by MemberService.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request

from ngo_api.dependencies import get_member_service
from ngo_api.schemas.common import DeleteResponse, ErrorResponse
from ngo_api.schemas.member import MemberResponse
from ngo_api.services.member_service import MemberService
from ngo_api.services.upload_intake import read_member_form

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Members"])


def _member_form_schema(required: bool) -> dict:
    """OpenAPI description of the member form (the body is parsed by hand)."""
    schema = {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "position": {"type": "string"},
            "description": {"type": "string"},
            "achievements": {"type": "string"},
            "image": {"type": "string", "format": "binary"},
        },
    }
    if required:
        schema["required"] = ["name", "position"]
    return {
        "requestBody": {
            "required": required,
            "content": {"multipart/form-data": {"schema": schema}},
        }
    }


@router.get(
    "/members",
    response_model=List[MemberResponse],
    responses={500: {"description": "Record store failure", "model": ErrorResponse}},
    summary="List all members",
)
async def list_members(
    service: MemberService = Depends(get_member_service),
) -> List[MemberResponse]:
    return await service.list_members()


@router.get(
    "/members/{member_id}",
    response_model=MemberResponse,
    responses={404: {"description": "Member not found", "model": ErrorResponse}},
    summary="Get a single member",
)
async def get_member(
    member_id: str,
    service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    return await service.get_member(member_id)


@router.post(
    "/members",
    status_code=201,
    response_model=MemberResponse,
    responses={
        400: {"description": "Missing name/position or invalid image", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Create a member",
    description=(
        "Multipart form with `name` and `position` (required), optional "
        "`description`, `achievements` and a single `image` file. "
        "Without an image the member's `imageRef` is null."
    ),
    openapi_extra=_member_form_schema(required=True),
)
async def create_member(
    request: Request,
    service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    submission = await read_member_form(request, partial=False)
    logger.debug(
        "Create member request: fields=%s image=%s",
        sorted(submission.fields),
        submission.image.filename if submission.image else None,
    )
    return await service.create_member(submission)


@router.put(
    "/members/{member_id}",
    response_model=MemberResponse,
    responses={
        400: {"description": "Blank name/position or invalid image", "model": ErrorResponse},
        404: {"description": "Member not found", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Update a member",
    description=(
        "Every field is optional; omitted fields keep their values. "
        "Sending a new `image` replaces the previous one, which is then deleted."
    ),
    openapi_extra=_member_form_schema(required=False),
)
async def update_member(
    member_id: str,
    request: Request,
    service: MemberService = Depends(get_member_service),
) -> MemberResponse:
    submission = await read_member_form(request, partial=True)
    return await service.update_member(member_id, submission)


@router.delete(
    "/members/{member_id}",
    response_model=DeleteResponse,
    responses={404: {"description": "Member not found", "model": ErrorResponse}},
    summary="Delete a member and its image",
)
async def delete_member(
    member_id: str,
    service: MemberService = Depends(get_member_service),
) -> DeleteResponse:
    await service.delete_member(member_id)
    return DeleteResponse(success=True)
