"""JSON export of a query snapshot.

Why JSON:
- Interoperability with other tools and pipelines.
- Keeps the result of a run without depending on the terminal rendering.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import QuerySnapshot


def export_snapshot_json(*, snapshot: QuerySnapshot, output_path: Path) -> Path:
    """Write `QuerySnapshot` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = snapshot.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
