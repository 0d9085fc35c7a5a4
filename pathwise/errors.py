"""Errors raised by the recommender."""

from typing import Optional


class RecommendationError(Exception):
    """Base class for recommendation failures."""
    pass


class PrerequisiteMissing(RecommendationError):
    """Raised when a user has not completed the interest questionnaire."""

    def __init__(self, user_id: Optional[str] = None):
        self.user_id = user_id
        if user_id is None:
            super().__init__("Interest assessment not completed")
        else:
            super().__init__(f"Interest assessment not completed for user {user_id}")


class Unresolvable(RecommendationError):
    """Raised when scoring produced no usable top candidate."""
    pass
