from __future__ import annotations

import functools
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol, TypeVar

from ..errors import ErrorCode, ProviderError, ResponseFormatError
from ..errors_parts.classification import TRANSIENT_CODES

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    """Bounded exponential backoff policy.

    ``max_attempts`` counts the first try, so the default allows two retries
    with delays ``delay_base ** attempt`` (1s then 2s).
    """

    max_attempts: int = 3
    delay_base: float = 2.0
    retryable_codes: tuple[ErrorCode, ...] = TRANSIENT_CODES
    attempt_logger: AttemptLogger | None = None

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield self.delay_base**attempt

    def is_retryable(self, error: ProviderError) -> bool:
        if isinstance(error, ResponseFormatError):
            return False
        return error.code in self.retryable_codes

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]], **kwargs: Any) -> "RetryConfig":
        """Build a config from a vendor config ``retry`` section.

        Unknown keys are ignored; missing or malformed values keep defaults.
        """
        values: dict[str, Any] = {}
        for key, cast in (("max_attempts", int), ("delay_base", float)):
            if raw and raw.get(key) is not None:
                try:
                    values[key] = cast(raw[key])
                except (TypeError, ValueError):
                    continue
        if values.get("max_attempts", 1) < 1:
            values.pop("max_attempts")
        values.update(kwargs)
        return cls(**values)


DEFAULT_RETRY_CONFIG = RetryConfig()
NO_RETRY = RetryConfig(max_attempts=1)


def retry(config: RetryConfig = DEFAULT_RETRY_CONFIG):
    """Return a decorator applying the standardized retry policy.

    - Retries only ``ProviderError`` instances the config deems retryable
    - Exponential backoff using ``delay_base ** attempt``
    - Any other exception (including cancellation) propagates immediately
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            last_exc: ProviderError | None = None
            # final attempt has delay None
            for attempt, delay in enumerate(list(config.delays()) + [None]):
                try:
                    result = func(*args, **kwargs)
                except ProviderError as e:
                    last_exc = e
                    retryable = config.is_retryable(e) and delay is not None
                    if config.attempt_logger:
                        config.attempt_logger(
                            attempt=attempt,
                            max_attempts=config.max_attempts,
                            delay=delay if retryable else None,
                            error=e,
                        )
                    if retryable:
                        time.sleep(delay)
                        continue
                    raise
                if config.attempt_logger:
                    config.attempt_logger(
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        delay=None,
                        error=None,
                    )
                return result
            if last_exc is None:  # pragma: no cover - defensive
                raise RuntimeError("retry: reached terminal state without captured exception")
            raise last_exc

        return wrapper

    return decorator


__all__ = [
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "NO_RETRY",
    "retry",
]
