from readlog.models.reading_activity import ReadingActivity
from readlog.models.user import User
from readlog.models.user_book import UserBook

__all__ = ["ReadingActivity", "User", "UserBook"]
