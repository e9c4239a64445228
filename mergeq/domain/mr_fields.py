"""Extraction of merge-request fields from issue descriptions.

MR issues carry their payload as ``key: value`` lines in the description,
for example::

    branch: polecat/Nux/gt-xyz
    target: integration/gastown
    source_issue: gt-xyz
    worker: Nux
    rig: gastown
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mergeq.core.models import MRFields

if TYPE_CHECKING:
    from mergeq.core.models import Issue

# Description keys (normalized) mapped to MRFields attribute names
_FIELD_KEYS: dict[str, str] = {
    "branch": "branch",
    "worker": "worker",
    "target": "target",
    "source_issue": "source_issue",
    "rig": "rig",
    "merge_commit": "merge_commit",
    "close_reason": "close_reason",
}


def _normalize_key(key: str) -> str:
    return key.strip().lower().replace("-", "_").replace(" ", "_")


def parse_description_fields(description: str | None) -> dict[str, str]:
    """Parse ``key: value`` lines from a description.

    Lines without a colon or with an empty key are skipped. Keys are
    normalized to lower snake_case; the first occurrence of a key wins.
    """
    fields: dict[str, str] = {}
    if not description:
        return fields
    for line in description.splitlines():
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = _normalize_key(key)
        if not key or key in fields:
            continue
        fields[key] = value.strip()
    return fields


def extract_mr_fields(issue: Issue) -> MRFields | None:
    """Extract MR fields from an issue.

    Returns None when the description carries none of the MR keys. The
    issue is not modified.
    """
    parsed = parse_description_fields(issue.description)
    values = {
        attr: parsed[key] for key, attr in _FIELD_KEYS.items() if key in parsed
    }
    if not values:
        return None
    return MRFields(**values)
