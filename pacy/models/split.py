from pydantic import BaseModel, ConfigDict, Field

from pacy.utils.pace import format_pace


class Split(BaseModel):
    """A (nominally) one kilometer segment of a completed workout."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=1)
    distance: float = Field(gt=0)  # in meters
    duration: float = Field(ge=0)  # in seconds
    average_heart_rate: float = Field(default=0.0, ge=0)

    @property
    def pace(self) -> float:
        """Seconds per kilometer."""
        # distance is always positive, so a pace always exists.
        return self.duration / (self.distance / 1000)

    @property
    def pace_string(self) -> str:
        return format_pace(self.pace)
