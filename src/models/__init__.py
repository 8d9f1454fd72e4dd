"""ORM models."""

from models.base import Base
from models.course import Course
from models.match import Match, Team, TeamPlayer
from models.roster import Group, GroupMember, Profile
from models.skill_index import SkillIndexEvent, SkillIndexSystem

__all__ = [
    "Base",
    "Course",
    "Group",
    "GroupMember",
    "Match",
    "Profile",
    "SkillIndexEvent",
    "SkillIndexSystem",
    "Team",
    "TeamPlayer",
]
