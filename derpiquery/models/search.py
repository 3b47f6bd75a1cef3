"""Pydantic models for search settings."""

from enum import Enum

from pydantic import BaseModel


class SearchFormat(str, Enum):
    """Sort key. Values are the ``sf`` wire codes."""

    CREATION_DATE = "created_at"
    SCORE = "score"
    RELEVANCE = "relevance"
    WIDTH = "width"
    HEIGHT = "height"
    COMMENTS = "comments"
    # Order is not stable across pages
    RANDOM = "random"


class SearchDirection(str, Enum):
    DESC = "desc"
    ASC = "asc"


class UserConstraint(str, Enum):
    """Restrict results against one of the authenticated user's lists."""

    IGNORE = ""
    ONLY = "only"
    NOT = "not"


class SearchSettings(BaseModel):
    query: str = ""
    # 1-based; the server caps per_page at 50
    page: int = 1
    per_page: int = 15
    show_comments: bool = False
    show_favorites: bool = False
    search_format: SearchFormat = SearchFormat.CREATION_DATE
    search_direction: SearchDirection = SearchDirection.DESC

    # User constraints only apply when api_key is set
    api_key: str = ""
    faves: UserConstraint = UserConstraint.IGNORE
    upvotes: UserConstraint = UserConstraint.IGNORE
    uploads: UserConstraint = UserConstraint.IGNORE
    watched: UserConstraint = UserConstraint.IGNORE

    # Inclusive range, only applied when score_constraint is set
    score_constraint: bool = False
    min_score: int = 0
    max_score: int = 0

    # -1 uses the default filter (or the key owner's current filter)
    filter_id: int = -1

    model_config = {"frozen": True}
