"""
Failure taxonomy for a poll cycle.

A missing or still-loading tab is not an exception; see types.Absence.

None of these are fatal: each one maps to an InterpretedState and the next
cycle runs as usual.
"""

from __future__ import annotations


class HornWatchError(Exception):
    """Base class for monitor failures."""


class TransportFailure(HornWatchError):
    """The status query was sent but produced no usable response."""


class UnrecognizedPayload(HornWatchError, ValueError):
    """The response text is not a known sentinel or duration."""
