"""Authorities shared by every fruit-company service."""
from .base import Authority, Credential
from .static import StaticBearerToken

__all__ = ["Authority", "Credential", "StaticBearerToken"]
