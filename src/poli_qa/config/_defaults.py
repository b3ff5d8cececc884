"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "scan": {
        "output": "src/poli.checklists.ts",
        "source_dir": "src",
    },
    "store": {
        "storage_key": "poli_qa_state",
        "database": "",
        "quota_bytes": 5_242_880,
        "tester_name": "",
    },
}
