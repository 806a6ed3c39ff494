"""Test-case identifier extraction from scenario tags."""

from __future__ import annotations

import re
from collections.abc import Iterable

TEST_CASE_TAG = re.compile(r"@?TC[-_](?P<test_case_id>\d+)(?=[-_,\s]|$)")


def extract_test_case_ids(tags: Iterable[str]) -> str:
    """Return the comma-terminated numeric ids referenced by ``TC-<id>``/``TC_<id>`` tags.

    Tag order is preserved and duplicates are kept.
    """
    test_case_ids = []
    for tag in tags:
        match = TEST_CASE_TAG.match(tag.strip())
        if match:
            test_case_ids.append(match.group("test_case_id"))
    return "".join(f"{test_case_id}," for test_case_id in test_case_ids)


def split_test_case_ids(value: object) -> tuple[str, ...]:
    """Split a stored test-case id field back into individual ids."""
    if value is None:
        return ()
    return tuple(filter(None, (item.strip() for item in str(value).split(","))))
