# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from ..config import settings

__all__ = ("EventBus", "Handler")

Handler = Callable[..., Any]
logger = logging.getLogger(__name__)


class EventBus:
    """In-proc synchronous pub/sub owned by a single binding.

    Handlers run inline, in registration order, when a topic is emitted.
    A failing handler is logged and does not stop the remaining handlers,
    unless ``settings.EVENT_HANDLER_ERRORS`` is ``"raise"``.
    """

    def __init__(self) -> None:
        self._subs: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> None:
        """Register a handler for a topic (idempotent per handler)."""
        if handler not in self._subs[topic]:
            self._subs[topic].append(handler)

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        """Remove a handler from a topic (idempotent)."""
        if topic in self._subs and handler in self._subs[topic]:
            self._subs[topic].remove(handler)
            if not self._subs[topic]:
                del self._subs[topic]

    def emit(self, topic: str, *args: Any, **kw: Any) -> None:
        """Call every handler of ``topic`` with ``*args, **kw``."""
        # Copy handler list to avoid surprises if subscribe/unsubscribe happens during emit
        handlers = list(self._subs.get(topic, ()))

        if not handlers:
            logger.debug(f"Emitting event to topic '{topic}' with no subscribers")
            return

        for h in handlers:
            try:
                h(*args, **kw)
            except Exception as e:
                if settings.EVENT_HANDLER_ERRORS == "raise":
                    raise
                handler_name = getattr(h, "__name__", repr(h))
                logger.error(
                    f"Handler '{handler_name}' failed for topic '{topic}': {e}",
                    exc_info=True,
                )
