"""FastAPI dependencies resolving the process-wide services from app.state."""

from fastapi import Request

from ngo_api.bootstrap import AppServices
from ngo_api.services.asset_store import LocalAssetStore
from ngo_api.services.event_service import EventService
from ngo_api.services.member_service import MemberService


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def get_member_service(request: Request) -> MemberService:
    return get_services(request).members


def get_event_service(request: Request) -> EventService:
    return get_services(request).events


def get_asset_store(request: Request) -> LocalAssetStore:
    return get_services(request).assets
