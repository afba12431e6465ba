"""Pydantic models shared across SuiteForge components."""

from suiteforge.models.client_config import ClientConfig
from suiteforge.models.credential import AuthHeader, Credential
from suiteforge.models.entity import Entity, User
from suiteforge.models.outcome import (
    ClientError,
    RequestOutcome,
    ServerError,
    Success,
    TransportFailure,
)

__all__ = [
    "AuthHeader",
    "ClientConfig",
    "ClientError",
    "Credential",
    "Entity",
    "RequestOutcome",
    "ServerError",
    "Success",
    "TransportFailure",
    "User",
]
