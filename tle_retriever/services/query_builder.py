from __future__ import annotations

from collections.abc import Sequence

DEFAULT_BASE_URL = "https://www.space-track.org"
QUERY_PATH = "/basicspacedata/query/class/gp/NORAD_CAT_ID/{ids}/orderby/TLE_LINE1%20ASC/format/json"


def build_query(norad_ids: Sequence[int], base_url: str = DEFAULT_BASE_URL) -> str:
    """Return the ``gp`` query URL for the given catalog numbers.

    Ids keep their order and duplicates; the provider rejects bad ids, not us.
    """
    if not norad_ids:
        raise ValueError("At least one NORAD catalog id is required")
    ids = ",".join(str(norad_id) for norad_id in norad_ids)
    return base_url.rstrip("/") + QUERY_PATH.format(ids=ids)
