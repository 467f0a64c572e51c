"""JSON output formatter for listings."""

from __future__ import annotations

import json

from fmcontent.entry import Entry
from fmcontent.lister import ContentListing


def format_json(result: ContentListing | list[Entry] | Entry) -> str:
    """Render a listing, an entry list or a single entry as indented JSON.

    A :class:`ContentListing` becomes ``{"directories": [...], "files": [...]}``.
    """
    if isinstance(result, ContentListing):
        payload: object = {
            "directories": [entry.to_dict() for entry in result.directories],
            "files": [entry.to_dict() for entry in result.files],
        }
    elif isinstance(result, Entry):
        payload = result.to_dict()
    else:
        payload = [entry.to_dict() for entry in result]
    return json.dumps(payload, indent=2, ensure_ascii=False)
