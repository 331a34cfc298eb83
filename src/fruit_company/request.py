"""Request descriptions consumed by `perform`."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .auth.base import Authority
from .http import HttpResponse, OutboundRequest

A = TypeVar("A", bound=Authority)
R = TypeVar("R")


class Request(ABC, Generic[A, R]):
    """One API operation: how to build its call and how to read the answer.

    Request objects are immutable descriptions. `perform` may call `prepare`
    more than once when an attempt is rejected as unauthorized, so it must
    build a brand new `OutboundRequest` every time.
    """

    @abstractmethod
    def prepare(self, authority: A) -> OutboundRequest:
        """Build the outgoing call; the authority attaches credentials afterwards."""

    @abstractmethod
    def parse(self, authority: A, response: HttpResponse) -> R:
        """Turn the response into a result, raising typed errors for failures."""

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in vars(self).items())
        return f"{type(self).__name__}({fields})"
