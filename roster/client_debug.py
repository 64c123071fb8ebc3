import inspect
import logging
from typing import Any


class ClientDebugWrapper:
    """Logs every coroutine call made on a wrapped collaborator client."""

    def __init__(self, inner, logger: logging.Logger, label: str):
        self._inner = inner
        self._logger = logger
        self._label = label

    def __getattr__(self, name: str):
        attr = getattr(self._inner, name)
        if not callable(attr) or not inspect.iscoroutinefunction(attr):
            return attr

        async def _wrapped(*args, **kwargs):
            self._logger.debug("%s.%s args=%s kwargs=%s", self._label, name, _short_args(args), _short_kwargs(kwargs))
            try:
                return await attr(*args, **kwargs)
            except Exception as e:
                self._logger.warning("%s.%s error=%s", self._label, name, repr(e))
                raise
        return _wrapped


def _short(value: Any) -> Any:
    # Avoid logging large payloads
    text = value if isinstance(value, str) else None
    if text is None and hasattr(value, "model_dump_json"):
        text = value.model_dump_json()
    if text is not None and len(text) > 200:
        return text[:200] + "…"
    return text if text is not None else value


def _short_args(args: tuple[Any, ...]) -> tuple[Any, ...]:
    if not args:
        return args
    return tuple(_short(a) for a in args)


def _short_kwargs(kwargs: dict[str, Any]) -> dict[str, Any]:
    if not kwargs:
        return kwargs
    return {k: _short(v) for k, v in kwargs.items()}


def wrap_client(client, logger: logging.Logger, label: str):
    return ClientDebugWrapper(client, logger, label)
