"""
NGO Site Backend - Member Upload Intake
=======================================

What:  Turns a member form submission (multipart or url-encoded) into a
       `MemberSubmission`: trimmed text fields plus at most one image.
Who:   POST /api/members and PUT /api/members/{id}.

Rules:
    - Text fields: name, position, description, achievements (trimmed)
    - File field:  "image", at most one part; a part with an empty filename
      (browser "no file chosen") counts as absent
    - Create (partial=False): name and position must be present and non-blank
    - Update (partial=True):  only submitted fields are returned; a submitted
      name/position must still be non-blank, checked by MemberService once
      the member is known to exist
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from ngo_api.exceptions import ValidationError

MEMBER_TEXT_FIELDS = ("name", "position", "description", "achievements")
MEMBER_REQUIRED_FIELDS = ("name", "position")
IMAGE_FIELD = "image"


@dataclass
class ImageUpload:
    field_name: str
    filename: str
    content: bytes


@dataclass
class MemberSubmission:
    fields: Dict[str, str] = field(default_factory=dict)
    image: Optional[ImageUpload] = None


async def _read_image(form: FormData) -> Optional[ImageUpload]:
    uploads = []
    for part in form.getlist(IMAGE_FIELD):
        if isinstance(part, UploadFile):
            if part.filename:
                uploads.append(part)
        elif part.strip():
            raise ValidationError(message="The image field must be a file upload", field=IMAGE_FIELD)

    if len(uploads) > 1:
        raise ValidationError(
            message="Only one image may be uploaded per member",
            field=IMAGE_FIELD,
            context={"received": len(uploads)},
        )
    if not uploads:
        return None

    upload = uploads[0]
    try:
        content = await upload.read()
    finally:
        await upload.close()
    return ImageUpload(field_name=IMAGE_FIELD, filename=upload.filename, content=content)


async def parse_member_form(form: FormData, partial: bool) -> MemberSubmission:
    """
    Extract member fields and image from parsed form data.

    Raises:
        ValidationError: missing/blank name or position on create, a text
            field sent as a file, or more than one image
    """
    fields: Dict[str, str] = {}
    for name in MEMBER_TEXT_FIELDS:
        if name not in form:
            continue
        value = form[name]
        if not isinstance(value, str):
            raise ValidationError(message=f"Field '{name}' must be text", field=name)
        fields[name] = value.strip()

    if not partial:
        check_required_fields(fields)

    return MemberSubmission(fields=fields, image=await _read_image(form))


def check_required_fields(fields: Dict[str, str], partial: bool = False) -> None:
    """
    Name and position must be non-blank; on update only when submitted.

    Updates call this after the member lookup so an unknown id answers 404.
    """
    for name in MEMBER_REQUIRED_FIELDS:
        present = name in fields
        if (not present and not partial) or (present and not fields[name]):
            raise ValidationError(message="Name and position are required", field=name)


async def read_member_form(request: Request, partial: bool) -> MemberSubmission:
    """Parse the request body as a form and extract the member submission."""
    try:
        form = await request.form()
    except (MultiPartException, HTTPException) as e:
        raise ValidationError(
            message="Request body must be multipart/form-data or url-encoded form data",
            context={"error": str(e)},
        )
    return await parse_member_form(form, partial=partial)
