from .session import ChartLeaderboardScore, ScoreData, ScoreUser, Session, UserDetails

__all__ = ["Session", "UserDetails", "ScoreUser", "ScoreData", "ChartLeaderboardScore"]
