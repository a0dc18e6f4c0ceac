from .user import User, UserPreferences

__all__ = ["User", "UserPreferences"]
