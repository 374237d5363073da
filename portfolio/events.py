from typing import Any, Callable, Dict, List

from application_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

PAGE_READY = "page-ready"
FILTER_SELECTED = "filter-selected"
RESUME_SELECTED = "resume-selected"

Handler = Callable[..., Any]


class EventRegistry:
    """Maps named UI events to the handlers registered for them.

    Dispatch calls each handler in registration order and returns their
    results, so coroutine handlers can be awaited by the caller.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}

    def register(self, event: str, handler: Handler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def handlers(self, event: str) -> List[Handler]:
        return list(self._handlers.get(event, []))

    def dispatch(self, event: str, *args: Any, **kwargs: Any) -> List[Any]:
        handlers = self._handlers.get(event)
        if not handlers:
            logger.debug("No handlers registered for '%s'", event)
            return []
        return [handler(*args, **kwargs) for handler in handlers]
