"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import hashlib


def sha1(s: str) -> str:
    return hashlib.sha1(s.encode("utf-8")).hexdigest()
