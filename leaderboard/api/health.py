import platform
import time
from typing import Any, Dict

from leaderboard import __version__


async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "version": __version__,
        "ts": time.time(),
        "runtime": {
            "python": platform.python_version(),
        },
    }
