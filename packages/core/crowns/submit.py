"""
Crown count submission for external trackers (e.g. MHCC).

Best effort: one POST, no retries. Failures are logged and reported as False.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import httpx
from pydantic import BaseModel

log = logging.getLogger(__name__)

CROWNS_ENDPOINT = (
    "https://script.google.com/macros/s/"
    "AKfycbxPI-eLyw-g6VG6s-3f_fbM6EZqOYp524TSAkGrKO23Ge2k38ir/exec"
)


class CrownCounts(BaseModel):
    user: str
    bronze: int = 0
    silver: int = 0
    gold: int = 0

    @property
    def total(self) -> int:
        return self.bronze + self.silver + self.gold


def submit_crowns(
    crowns: Optional[CrownCounts],
    client: Optional[httpx.Client] = None,
    endpoint: str = CROWNS_ENDPOINT,
) -> Union[int, bool]:
    """
    Submit crown counts.

    Returns the number of submitted crowns, or False when there was nothing
    to send or the POST failed.
    """
    if crowns is None or not crowns.user or crowns.total == 0:
        return False

    own_client = client is None
    http = client or httpx.Client(timeout=10.0, follow_redirects=True)
    try:
        # Single multipart form field, the same shape a browser FormData sends
        resp = http.post(endpoint, files={"main": (None, crowns.model_dump_json())})
    except httpx.HTTPError:
        log.exception("Error submitting user crowns for %s", crowns.user)
        return False
    finally:
        if own_client:
            http.close()

    if not resp.is_success:
        log.error("Crown submission for %s rejected: HTTP %s", crowns.user, resp.status_code)
        return False
    return crowns.total
