import logging
import time

import httpx

_START_KEY = "roster.start"


class HTTPLogHooks:
    """httpx event hooks logging each request the clients issue."""

    def __init__(self, logger_name: str = "roster.http"):
        self._logger = logging.getLogger(logger_name)

    async def on_request(self, request: httpx.Request) -> None:
        request.extensions[_START_KEY] = time.time()
        self._logger.debug("http.request start method=%s url=%s", request.method, request.url)

    async def on_response(self, response: httpx.Response) -> None:
        request = response.request
        start = request.extensions.get(_START_KEY)
        dur_ms = int((time.time() - start) * 1000) if start is not None else -1
        if response.is_error:
            self._logger.warning("http.request error method=%s url=%s status=%s dur_ms=%s",
                                 request.method, request.url, response.status_code, dur_ms)
        else:
            self._logger.debug("http.request end method=%s url=%s status=%s dur_ms=%s",
                               request.method, request.url, response.status_code, dur_ms)

    def as_event_hooks(self) -> dict[str, list]:
        return {"request": [self.on_request], "response": [self.on_response]}
