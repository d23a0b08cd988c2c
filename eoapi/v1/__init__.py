from .session import ScoreData, Session, Song, User, UserData

__all__ = ["Session", "ScoreData", "UserData", "User", "Song"]
