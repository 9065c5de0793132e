from typing import Any, Dict, Optional
import requests
from ..config import USER_AGENT, REQUEST_TIMEOUT

SESSION = requests.Session()
SESSION.headers.update(
    {
        "accept": "application/json, text/plain, */*",
        "user-agent": USER_AGENT,
    }
)


def get_json(
    url: str,
    *,
    params: Optional[Dict[str, str]] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> Any:
    r = SESSION.get(url, params=params, timeout=timeout)
    r.raise_for_status()
    return r.json()
