from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class Target:
    """An open game tab."""
    id: str
    url: str
    websocket_url: str
    title: str = ""
    complete: bool = True  # document finished loading


class TargetLocator(ABC):
    """Finds the tab to monitor."""

    @abstractmethod
    def find(self, patterns: Sequence[str]) -> Optional[Target]:
        """Return the first open tab matching one of the URL patterns, or None."""
        ...


class StatusRequester(ABC):
    """Asks a tab for its hunt timer text."""

    @abstractmethod
    def request_status(self, target: Target) -> Optional[str]:
        """
        Return the raw status text, or None on an empty reply.
        Raises TransportFailure when the tab can't be queried.
        """
        ...
