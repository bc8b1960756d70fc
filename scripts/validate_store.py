#!/usr/bin/env python3
"""Lightweight validator for the persisted transaction and budget data."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from finance_tracker.config import BUDGETS_KEY, TRANSACTIONS_KEY  # noqa: E402
from finance_tracker.models import Budget, Transaction  # noqa: E402
from finance_tracker.storage import JsonFileKeyValueStore  # noqa: E402


def validate_array(raw: Optional[str], parse: Callable[[Any], Any]) -> List[str]:
    """Return one message per problem found in a serialized array."""
    if raw is None:
        return []
    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as e:
        return [f"not valid JSON ({e})"]
    if not isinstance(entries, list):
        return ["expected a JSON array"]

    errors = []
    for index, entry in enumerate(entries):
        try:
            parse(entry)
        except (KeyError, TypeError, ValueError) as e:
            errors.append(f"record {index}: {e!r}")
    return errors


def main(argv: Optional[List[str]] = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    store = JsonFileKeyValueStore(Path(args[0]) if args else None)
    if not store.path.exists():
        print(f"Store file not found: {store.path}")
        return 1

    issues = []
    for key, parse in [(TRANSACTIONS_KEY, Transaction.from_dict), (BUDGETS_KEY, Budget.from_dict)]:
        for message in validate_array(store.get_item(key), parse):
            issues.append((key, message))

    if issues:
        print("Store validation failed:")
        for key, message in issues:
            print(f"  - {key}: {message}")
        return 1

    print("Stored data validated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
