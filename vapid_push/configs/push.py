from pydantic import BaseModel, Field


class PushConfig(BaseModel):
    """Defaults for a single push request."""

    Timeout: float = Field(default=2.0, gt=0, description="Seconds to wait for the push service")
    TTL: int = Field(default=0, ge=0, description="Seconds the push service keeps an undelivered message")
