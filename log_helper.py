import json
from datetime import datetime, timezone


def log(level, msg, **kwargs):
    payload = {"ts": datetime.now(timezone.utc).isoformat(), "level": level.upper(), "msg": msg, **kwargs}
    print(json.dumps(payload, default=str), flush=True)
