import json
import time
import os
from typing import Optional

DEFAULT_LOG = "audit.jsonl"

def log_path() -> str:
    return os.getenv("ORDER_UID_AUDIT_LOG", DEFAULT_LOG)

def append(entry: dict, path: Optional[str] = None):
    entry = dict(entry, ts_ns=time.time_ns())
    # Serialize with minimal separators to be byte-dense and JSONL format
    entry_line = json.dumps(entry, separators=(",", ":")) + "\n"

    with open(path or log_path(), "a", buffering=1) as f:
        f.write(entry_line)
        f.flush()
        os.fsync(f.fileno())
