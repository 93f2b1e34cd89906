from .session import LiveWorkoutSession, SessionNotActiveError

__all__ = ["LiveWorkoutSession", "SessionNotActiveError"]
