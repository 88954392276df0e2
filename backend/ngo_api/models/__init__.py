from ngo_api.models.event import Event
from ngo_api.models.member import Member

__all__ = ["Event", "Member"]
