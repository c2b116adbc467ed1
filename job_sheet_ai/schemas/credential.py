"""Credential probe outcome."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CredentialStatus(str, Enum):
    VALID = "valid"
    UNAUTHORIZED = "unauthorized"
    PAYMENT_REQUIRED = "payment_required"
    RATE_LIMITED = "rate_limited"
    UPSTREAM = "upstream"


class ProbeResult(BaseModel):
    """Classification of an API credential from one minimal call."""

    model_config = ConfigDict(frozen=True)

    status: CredentialStatus
    reason: Optional[str] = Field(default=None, description="User-facing reason when not valid")
    status_code: Optional[int] = Field(default=None, description="Upstream HTTP status, if any")

    @property
    def valid(self) -> bool:
        return self.status is CredentialStatus.VALID
