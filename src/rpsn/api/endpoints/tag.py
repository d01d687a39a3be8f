"""``/tag`` -- space-wide tags."""

from __future__ import annotations

from typing import Optional

from rpsn.api.types import ApiResponse, TagsData
from rpsn.client import RepsonaClient


def list_tags(client: RepsonaClient) -> Optional[ApiResponse[TagsData]]:
    return client.get("tag/all", model=ApiResponse[TagsData])


def parse_tags(raw: Optional[str]) -> Optional[list[int]]:
    """Parse ``"1,2,x"`` into ``[1, 2]``.

    Entries that are not integers are skipped silently. ``None`` or an
    empty string yields ``None`` so the field is left out of the request.
    """
    if not raw:
        return None
    tags = []
    for entry in raw.split(","):
        try:
            tags.append(int(entry.strip()))
        except ValueError:
            continue
    return tags
