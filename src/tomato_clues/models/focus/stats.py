"""Points, streaks and last-session tracking."""

from datetime import date, timedelta

from pydantic import BaseModel, Field

from .plan import LastSession, SessionHistory

POINTS_PER_PULSE = 10
REWARD_MESSAGE = f"+{POINTS_PER_PULSE} points · Keep going"


class FocusStats(BaseModel):
    """Lifetime focus statistics."""

    points: int = Field(default=0)
    streak: int = Field(default=0)
    last_day: str | None = Field(default=None, description="ISO date of last activity")
    pulses: int = Field(default=0)
    last_session: LastSession | None = Field(default=None)

    def ensure_streak(self, today: date) -> None:
        """Roll the streak forward on the first activity of a new day."""
        today_str = today.isoformat()
        if self.last_day == today_str:
            return

        yesterday = (today - timedelta(days=1)).isoformat()
        if self.last_day == yesterday:
            self.streak += 1
        else:
            # First-ever active day also starts at 1
            self.streak = 1
        self.last_day = today_str

    def reward_pulse(self, tag: str, today: date, new_session: bool = False) -> str:
        """Credit one completed pulse and return the reward message.

        ``new_session`` marks the first pulse of a session, which restarts the
        last-session count even when the tag is unchanged.
        """
        self.ensure_streak(today)
        self.points += POINTS_PER_PULSE
        self.pulses += 1

        if not new_session and self.last_session and self.last_session.tag == tag:
            self.last_session = LastSession(
                tag=tag, completed_pulses=self.last_session.completed_pulses + 1
            )
        else:
            self.last_session = LastSession(tag=tag, completed_pulses=1)
        return REWARD_MESSAGE

    def history(self) -> SessionHistory:
        """View used by the planner."""
        return SessionHistory(last_session=self.last_session)
