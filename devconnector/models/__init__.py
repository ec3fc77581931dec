"""Document models."""

from devconnector.models.profile import Education, Experience, Profile, Social
from devconnector.models.user import User

__all__ = ["User", "Profile", "Experience", "Education", "Social"]
