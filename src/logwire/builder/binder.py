"""
Argument binding.

Computes constructor arguments for a target type from a component definition.
An explicit ``arguments`` entry is used verbatim. Otherwise the target's
constructor parameters are introspected in declared order and each one is
resolved from the definition key of the same name:

- level-like parameters go through the symbolic level table and default to
  the target's own default, else the minimum level
- a ``handler`` parameter is resolved recursively into a handler instance
- anything else falls back to the target's declared default

Positional binding stops at the first parameter that can be resolved neither
from the definition nor from a default, so optional trailing parameters can be
left out of configuration entirely.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from logwire.builder.context import ResolutionContext
from logwire.config.store import thaw
from logwire.errors import ComponentConstructionFailure
from logwire.levels import MINIMUM_LEVEL, to_level

LEVEL_PARAMETERS = frozenset({"level", "min_level", "max_level", "action_level", "flush_level"})

HANDLER_PARAMETER = "handler"

_MISSING = object()


@dataclass
class BoundArguments:
    """Positional and keyword arguments for one constructor call."""

    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)


class ArgumentBinder:
    """
    Binds component definitions to constructor parameters.

    Args:
        resolve_handler: Callback resolving a nested handler reference
            (name or inline definition) within a context
    """

    def __init__(self, resolve_handler: Callable[[Any, ResolutionContext], Any]):
        self._resolve_handler = resolve_handler

    def bind(self, target: Any, definition: Mapping[str, Any], context: ResolutionContext) -> BoundArguments:
        """
        Compute constructor arguments for ``target``.

        Args:
            target: Class or callable to construct
            definition: Component definition
            context: Resolution context

        Returns:
            Bound positional and keyword arguments
        """
        if "arguments" in definition:
            return self.explicit(definition["arguments"])
        return self.introspect(target, definition, context)

    @staticmethod
    def explicit(arguments: Any) -> BoundArguments:
        """Use an ``arguments`` entry verbatim: a mapping is keywords, a sequence is positional."""
        if arguments is None:
            return BoundArguments()
        if isinstance(arguments, Mapping):
            return BoundArguments(kwargs=thaw(arguments))
        if isinstance(arguments, (list, tuple)):
            return BoundArguments(args=thaw(arguments))
        return BoundArguments(args=[arguments])

    def introspect(
        self,
        target: Any,
        definition: Mapping[str, Any],
        context: ResolutionContext,
        skip: int = 0,
    ) -> BoundArguments:
        """
        Bind ``definition`` by the target's constructor parameter names.

        Args:
            target: Class or callable to construct
            definition: Component definition
            context: Resolution context
            skip: Number of leading positional parameters already supplied by the caller

        Returns:
            Bound arguments
        """
        bound = BoundArguments()
        positional_open = True
        for parameter in self.parameters(target)[skip:]:
            if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
                if parameter.name in definition:
                    bound.kwargs[parameter.name] = self.resolve_parameter(parameter, definition, context)
                continue

            if not positional_open:
                continue
            value = self.resolve_parameter(parameter, definition, context)
            if value is _MISSING:
                positional_open = False
            else:
                bound.args.append(value)
        return bound

    @staticmethod
    def parameters(target: Any) -> list[inspect.Parameter]:
        """Constructor parameters of ``target`` in declared order (empty if not introspectable)."""
        try:
            return list(inspect.signature(target).parameters.values())
        except (TypeError, ValueError):
            return []

    def resolve_parameter(
        self,
        parameter: inspect.Parameter,
        definition: Mapping[str, Any],
        context: ResolutionContext,
    ) -> Any:
        """
        Resolve one parameter.

        Returns:
            The bound value, or a sentinel when the parameter can be resolved
            neither from the definition nor from a default
        """
        name = parameter.name
        has_default = parameter.default is not inspect.Parameter.empty

        if name in definition:
            value = definition[name]
            if name in LEVEL_PARAMETERS:
                return self.level(value, context)
            if name == HANDLER_PARAMETER:
                return self._resolve_handler(value, context)
            return thaw(value)

        if name in LEVEL_PARAMETERS:
            return parameter.default if has_default else MINIMUM_LEVEL
        if has_default:
            return parameter.default
        return _MISSING

    @staticmethod
    def level(value: Any, context: ResolutionContext) -> int:
        """Resolve a level name through the level table, reporting unknown names."""
        try:
            return to_level(value)
        except ValueError as e:
            context.fail(str(e), ComponentConstructionFailure, e)
