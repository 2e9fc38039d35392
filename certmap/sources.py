import json
from pathlib import Path
from typing import Any, Union

import requests

from certmap.config import FETCH_TIMEOUT
from certmap.errors import SourceFetchError

Source = Union[str, Path]


def is_url(source: Source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def fetch_bytes(source: Source, timeout: int = FETCH_TIMEOUT) -> bytes:
    """Read a local file or GET a URL. Non-2xx responses count as failures."""
    if is_url(source):
        try:
            r = requests.get(source, timeout=timeout)
            r.raise_for_status()
        except requests.RequestException as exc:
            raise SourceFetchError(f"Failed to fetch {source}: {exc}") from exc
        return r.content

    try:
        return Path(source).read_bytes()
    except OSError as exc:
        raise SourceFetchError(f"Failed to read {source}: {exc}") from exc


def fetch_json(source: Source, timeout: int = FETCH_TIMEOUT) -> Any:
    data = fetch_bytes(source, timeout=timeout)
    try:
        return json.loads(data)
    except ValueError as exc:
        raise SourceFetchError(f"{source} is not valid JSON: {exc}") from exc
