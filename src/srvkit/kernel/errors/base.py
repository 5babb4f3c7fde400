"""Root of the srvkit error hierarchy and cause-chain helpers."""

from __future__ import annotations

import json
from typing import Any, Iterator


def iter_causes(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and then each explicit ``__cause__`` behind it."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__


class BaseError(Exception):
    """Every error srvkit raises derives from this class.

    ``message`` is the text without the cause; ``str(err)`` appends the
    cause's text after a colon, so log lines show the whole chain.
    ``code`` is a stable slug for machines and defaults to the class's
    ``default_code``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    @property
    def root_cause(self) -> BaseException:
        """The innermost exception of the cause chain (``self`` if none)."""
        *_, last = iter_causes(self)
        return last

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


__all__ = ["BaseError", "iter_causes"]
