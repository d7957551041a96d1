"""Per-call resolution context."""

from dataclasses import dataclass, replace
from typing import NoReturn, Type

from logwire.errors import ComponentConstructionFailure, ConfigurationError, ErrorReporter


@dataclass(frozen=True)
class ResolutionContext:
    """
    State threaded through one channel's component resolution.

    Contexts are immutable: descending into a nested handler returns a new
    context, so nothing leaks between sibling components or between channels.

    Attributes:
        channel: Channel under construction (reported in errors)
        reporter: Raises annotated configuration errors
        trail: Named component references currently being resolved, outermost first
    """

    channel: str
    reporter: ErrorReporter
    trail: tuple[str, ...] = ()

    def descend(self, section: str, name: str) -> "ResolutionContext":
        """
        Enter the named definition ``section/name``.

        Raises:
            ComponentConstructionFailure: If ``name`` is already being resolved
        """
        key = f"{section}/{name}"
        if key in self.trail:
            chain = " -> ".join((*self.trail, key))
            self.fail(f"{section} - {name} wraps itself: {chain}", ComponentConstructionFailure)
        return replace(self, trail=(*self.trail, key))

    def fail(
        self,
        message: str,
        kind: Type[ConfigurationError] = ConfigurationError,
        cause: BaseException | None = None,
    ) -> NoReturn:
        """Raise ``kind`` annotated with this context's channel."""
        self.reporter.fail(self.channel, message, kind, cause)
