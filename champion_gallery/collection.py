from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Union

import requests

from champion_gallery.config import Settings
from champion_gallery.models import Character, PayloadError, decode_collection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotStarted:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Loaded:
    characters: Tuple[Character, ...]


@dataclass(frozen=True)
class Failed:
    error: str


CollectionState = Union[NotStarted, Loading, Loaded, Failed]


def fetch_collection(settings: Settings, session: Optional[Any] = None) -> CollectionState:
    """Fetch and decode the whole catalog.

    Transport and decoding failures both come back as ``Failed``; nothing
    is raised for them.
    """
    http = session if session is not None else requests
    logger.info("Fetching champion catalog from %s", settings.endpoint)
    try:
        response = http.get(settings.endpoint, timeout=settings.request_timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.exceptions.RequestException as exc:
        logger.warning("Catalog request failed: %s", exc)
        return Failed(f"Could not load champions: {exc}")
    except ValueError as exc:
        logger.warning("Catalog response is not valid JSON: %s", exc)
        return Failed(f"Could not read champions: {exc}")

    try:
        characters = decode_collection(payload)
    except PayloadError as exc:
        logger.warning("Catalog payload rejected: %s", exc)
        return Failed(f"Could not read champions: {exc}")

    logger.info("Loaded %d champions", len(characters))
    return Loaded(characters)


class CollectionLoader:
    """Runs the one catalog fetch of an application's lifetime on a daemon thread."""

    def __init__(
        self,
        settings: Settings,
        on_settle: Callable[[CollectionState], None],
        session: Optional[Any] = None,
    ) -> None:
        self.settings = settings
        self.on_settle = on_settle
        self.session = session
        self._thread: Optional[threading.Thread] = None

    @property
    def started(self) -> bool:
        return self._thread is not None

    def start(self) -> threading.Thread:
        if self._thread is not None:
            raise RuntimeError("Champion catalog fetch already started")
        self._thread = threading.Thread(
            target=self._run,
            name="champion-catalog-fetch",
            daemon=True,
        )
        self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        try:
            result = fetch_collection(self.settings, session=self.session)
        except Exception as exc:
            logger.exception("Champion catalog fetch crashed")
            result = Failed(f"Could not load champions: {exc}")
        self.on_settle(result)
