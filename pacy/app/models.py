from pydantic import BaseModel

from .env_loader import EnvironmentName


class EnvironmentResponse(BaseModel):
    """Response model for the environment endpoint."""

    environment: EnvironmentName
