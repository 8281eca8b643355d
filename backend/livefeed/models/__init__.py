from livefeed.models.post import Post
from livefeed.models.user import User

__all__ = ["Post", "User"]
