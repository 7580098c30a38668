from typing import Any, Callable, Protocol


class CompletionSchedulerPort(Protocol):
    """Decides on which execution context completions run.

    The handler never calls a completion directly; it hands it to a scheduler
    so the dispatch logic stays independent of the caller's context.
    """

    def deliver(self, callback: Callable[..., Any], *args: Any) -> None:  # pragma: no cover - protocol
        ...
