"""
First-success combinator for ordered fallback cascades.

A cascade is an ordered list of named async strategies sharing one
signature, ``(input) -> output``. A strategy succeeds by returning and
fails by raising. ``first_success`` runs them in order and returns the
first result, recording every failure on the way.

Dependencies: None
System role: Generic fallback execution used by the embedding provider
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from docqa.core.exceptions import DocQAException

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


@dataclass(frozen=True)
class NamedStrategy(Generic[InputT, OutputT]):
    """A strategy function with a name used in logs and results."""

    name: str
    func: Callable[[InputT], Awaitable[OutputT]]

    async def __call__(self, value: InputT) -> OutputT:
        return await self.func(value)


@dataclass(frozen=True)
class StrategyFailure:
    """One failed strategy attempt."""

    name: str
    error: BaseException

    def describe(self) -> str:
        return f"{self.name}: {type(self.error).__name__}: {self.error}"


@dataclass
class FallbackResult(Generic[OutputT]):
    """Output of the first strategy that succeeded, plus earlier failures."""

    value: OutputT
    strategy: str
    failures: list[StrategyFailure] = field(default_factory=list)


class FallbackExhaustedError(DocQAException):
    """Raised when every strategy in a cascade failed."""

    def __init__(self, failures: list[StrategyFailure]) -> None:
        self.failures = failures
        super().__init__(
            f"All {len(failures)} strategies failed",
            {"failures": [f.describe() for f in failures]},
        )


async def first_success(
    strategies: Sequence[NamedStrategy[InputT, OutputT]],
    value: InputT,
    *,
    propagate: tuple[type[BaseException], ...] = (),
) -> FallbackResult[OutputT]:
    """
    Run strategies in order and return the first successful output.

    Args:
        strategies: Ordered strategies, tried first to last
        value: Input passed to every strategy
        propagate: Exception types re-raised immediately instead of
            counted as a failure

    Returns:
        FallbackResult: Winning value, its strategy name and prior failures

    Raises:
        FallbackExhaustedError: When all strategies raised (or none given)
    """
    failures: list[StrategyFailure] = []

    for strategy in strategies:
        try:
            result = await strategy(value)
        except propagate:
            raise
        except Exception as e:
            failure = StrategyFailure(name=strategy.name, error=e)
            failures.append(failure)
            logger.warning(f"{__name__}:first_success - Strategy failed: {failure.describe()}")
            continue

        if failures:
            logger.info(
                f"{__name__}:first_success - '{strategy.name}' succeeded "
                f"after {len(failures)} failed strategies"
            )
        return FallbackResult(value=result, strategy=strategy.name, failures=failures)

    raise FallbackExhaustedError(failures)
