"""Helper utilities."""

import hashlib
from typing import List, Optional, Union
from urllib.parse import urlencode

from devconnector.config import settings


def gravatar_url(email: str, size: Optional[int] = None) -> str:
    """Build the gravatar URL for an email address."""
    digest = hashlib.md5(email.strip().lower().encode()).hexdigest()
    query = urlencode(
        {
            "s": size or settings.GRAVATAR_SIZE,
            "r": settings.GRAVATAR_RATING,
            "d": settings.GRAVATAR_DEFAULT,
        }
    )
    return f"//www.gravatar.com/avatar/{digest}?{query}"


def split_skills(value: Union[str, List[str], None]) -> List[str]:
    """Normalize skills given as ``"a, b,c"`` or a list; order is kept."""
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [s.strip() for s in items if s and s.strip()]
