from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

QuantityKind = Literal["distance", "heart_rate"]


class Sample(BaseModel):
    """One recorded observation over the half-open interval [start_time, end_time).

    `value` is meters for distance samples and beats per minute for heart rate.
    """

    model_config = ConfigDict(frozen=True)

    start_time: datetime
    end_time: datetime
    value: float = Field(allow_inf_nan=False)

    @property
    def duration_seconds(self) -> float:
        """Length of the interval in seconds.

        Inverted intervals are malformed and count as zero-length.
        """
        return max(0.0, (self.end_time - self.start_time).total_seconds())

    def contains(self, other: "Sample") -> bool:
        """Whether `other` lies entirely within this sample's interval."""
        return other.start_time >= self.start_time and other.end_time <= self.end_time
