"""View counter storage, exposed as ``plugins.store``.

Data lives in ``.data/data.json`` next to this file unless
``SITE_STORE_PATH`` points elsewhere.
"""

import os
from pathlib import Path

from burrow.store import KeyValueStore

__all__ = ["delete", "get", "set"]

_store = KeyValueStore(
    os.environ.get("SITE_STORE_PATH") or Path(__file__).parent / ".data" / "data.json"
)

get = _store.get
set = _store.set
delete = _store.delete
