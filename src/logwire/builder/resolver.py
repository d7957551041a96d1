"""
Component resolution.

Turns a handler or processor reference into a constructed instance. A
reference is either a name, looked up in the document's ``handlers`` or
``processors`` section, or an inline definition used once.

Handler targets come from ``type`` (a shorthand resolved against the handler
namespace: ``Stream`` -> ``logwire.handlers.StreamHandler``) or ``class`` (a
dotted import path). A few handler types bind their arguments specially; see
``HANDLER_VARIANTS``.

Named definitions are configuration templates: every reference constructs a
fresh instance.
"""

import importlib
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import structlog

from logwire.builder.binder import ArgumentBinder, BoundArguments
from logwire.builder.context import ResolutionContext
from logwire.config.store import ConfigurationStore, thaw
from logwire.errors import ComponentConstructionFailure, MissingTarget, UndefinedReference
from logwire.handlers.rotating import RotatingFileHandler
from logwire.levels import MINIMUM_LEVEL

logger = structlog.get_logger()

INLINE = "<inline>"


@dataclass(frozen=True)
class HandlerVariant:
    """
    Special handling for one handler ``type``.

    Attributes:
        target: Class name inside the handler namespace (None = naming convention)
        bind: Replaces generic argument binding (None = generic binding)
    """

    target: str | None = None
    bind: Callable[[ArgumentBinder, Any, Mapping[str, Any], ResolutionContext], BoundArguments] | None = None


def _bind_raw_definition(
    binder: ArgumentBinder, target: Any, definition: Mapping[str, Any], context: ResolutionContext
) -> BoundArguments:
    """Pass the whole definition record as the sole argument."""
    return BoundArguments(args=[thaw(definition)])


def _bind_stream(
    binder: ArgumentBinder, target: Any, definition: Mapping[str, Any], context: ResolutionContext
) -> BoundArguments:
    """Bind ``file`` from its literal key, then the remaining parameters by name."""
    if "file" not in definition:
        context.fail("stream handler requires a 'file' entry", ComponentConstructionFailure)
    bound = binder.introspect(target, definition, context, skip=1)
    bound.args.insert(0, thaw(definition["file"]))
    return bound


# Keyed by lower-cased handler ``type``
HANDLER_VARIANTS: dict[str, HandlerVariant] = {
    "couchdb": HandlerVariant(target="CouchDBHandler", bind=_bind_raw_definition),
    "stream": HandlerVariant(target="StreamHandler", bind=_bind_stream),
    "buffer": HandlerVariant(target="BufferHandler"),
}


def target_name_for_type(handler_type: str, namespace: str = "logwire.handlers") -> str:
    """
    Map a handler ``type`` to the dotted path of its class.

    Examples:
        >>> target_name_for_type("Stream")
        'logwire.handlers.StreamHandler'
        >>> target_name_for_type("rotatingFile")
        'logwire.handlers.RotatingFileHandler'
    """
    variant = HANDLER_VARIANTS.get(handler_type.lower())
    if variant is not None and variant.target is not None:
        class_name = variant.target
    else:
        class_name = f"{handler_type[:1].upper()}{handler_type[1:]}Handler"
    return f"{namespace}.{class_name}"


def import_target(dotted_path: str) -> Any:
    """
    Import an object from a dotted path.

    The longest importable module prefix is imported and the remaining parts
    are resolved as attributes, so nested classes work too.

    Raises:
        ImportError: If no prefix is importable or an attribute is missing
    """
    parts = dotted_path.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            # Only skip when the missing module is the prefix itself, not a dependency of it
            if e.name is not None and (module_name == e.name or module_name.startswith(f"{e.name}.")):
                continue
            raise
        for attribute in parts[split:]:
            try:
                obj = getattr(obj, attribute)
            except AttributeError as e:
                raise ImportError(f"'{module_name}' has no attribute '{'.'.join(parts[split:])}'") from e
        return obj
    raise ImportError(f"Cannot import '{dotted_path}'")


class ComponentResolver:
    """
    Resolves handler and processor references into instances.

    Args:
        store: Configuration store holding named definitions
        handler_namespace: Module that handler ``type`` shorthands resolve against

    Example:
        >>> resolver = ComponentResolver(store)
        >>> handler = resolver.resolve_handler("console", context)
        >>> handler = resolver.resolve_handler({"type": "Null"}, context)
    """

    def __init__(self, store: ConfigurationStore, handler_namespace: str = "logwire.handlers"):
        self.store = store
        self.handler_namespace = handler_namespace
        self.binder = ArgumentBinder(self.resolve_handler)

    def resolve_handler(self, ref: Any, context: ResolutionContext) -> Any:
        """
        Resolve a handler reference into a constructed, configured handler.

        Args:
            ref: Handler name or inline definition
            context: Resolution context

        Returns:
            Handler instance

        Raises:
            UndefinedReference: If a named handler is not defined
            MissingTarget: If the definition has neither ``type`` nor ``class``
            ComponentConstructionFailure: If import, construction or a setter fails
        """
        label, definition, context = self._definition("handlers", ref, context)

        handler_type = definition.get("type")
        if handler_type:
            target_path = target_name_for_type(str(handler_type), self.handler_namespace)
            variant = HANDLER_VARIANTS.get(str(handler_type).lower())
        elif definition.get("class"):
            target_path = str(definition["class"])
            variant = None
        else:
            context.fail(f"handlers - {label} has neither 'type' nor 'class'", MissingTarget)

        target = self._import(target_path, label, "handlers", context)

        if "arguments" in definition:
            bound = self.binder.explicit(definition["arguments"])
        elif variant is not None and variant.bind is not None:
            bound = variant.bind(self.binder, target, definition, context)
        else:
            bound = self.binder.introspect(target, definition, context)

        handler = self._construct(target, bound, label, "handlers", context)
        self._apply_setters(handler, definition, label, context)

        logger.debug(
            "handler.constructed",
            channel=context.channel,
            handler=label,
            target=target_path,
        )
        return handler

    def resolve_processor(self, ref: Any, context: ResolutionContext) -> Any:
        """
        Resolve a processor reference into a callable processor.

        Only ``class`` and ``arguments`` are honoured. A class is instantiated
        with ``arguments``; a plain function is used as-is unless ``arguments``
        are given, in which case it is called with them to obtain the processor.

        Args:
            ref: Processor name or inline definition
            context: Resolution context

        Returns:
            Processor callable
        """
        label, definition, context = self._definition("processors", ref, context)

        target_path = definition.get("class")
        if not target_path:
            context.fail(f"processors - {label} has no 'class'", MissingTarget)

        target = self._import(str(target_path), label, "processors", context)

        if inspect.isclass(target) or "arguments" in definition:
            bound = self.binder.explicit(definition.get("arguments"))
            processor = self._construct(target, bound, label, "processors", context)
        else:
            processor = target

        if not callable(processor):
            context.fail(
                f"processors - {label} built a non-callable {type(processor).__name__}",
                ComponentConstructionFailure,
            )

        logger.debug(
            "processor.constructed",
            channel=context.channel,
            processor=label,
            target=str(target_path),
        )
        return processor

    def _definition(
        self, section: str, ref: Any, context: ResolutionContext
    ) -> tuple[str, Mapping[str, Any], ResolutionContext]:
        """Return (label, definition, context) for a named or inline reference."""
        if isinstance(ref, str):
            definition = self.store.lookup(section, ref)
            if definition is None:
                context.fail(
                    f"{section} - {ref} was referred to in logging configuration but was not defined",
                    UndefinedReference,
                )
            return ref, definition, context.descend(section, ref)
        if isinstance(ref, Mapping):
            return INLINE, ref, context
        context.fail(
            f"{section} references must be a name or a mapping, got {type(ref).__name__}",
            ComponentConstructionFailure,
        )

    def _import(self, target_path: str, label: str, section: str, context: ResolutionContext) -> Any:
        try:
            return import_target(target_path)
        except ImportError as e:
            context.fail(f"{section} - {label}: cannot import '{target_path}': {e}", ComponentConstructionFailure, e)

    def _construct(
        self, target: Any, bound: BoundArguments, label: str, section: str, context: ResolutionContext
    ) -> Any:
        try:
            return target(*bound.args, **bound.kwargs)
        except Exception as e:
            context.fail(
                f"{section} - {label}: constructing {getattr(target, '__qualname__', target)} failed: {e}",
                ComponentConstructionFailure,
                e,
            )

    def _apply_setters(
        self, handler: Any, definition: Mapping[str, Any], label: str, context: ResolutionContext
    ) -> None:
        """Apply bubble, level and rotation formats after construction."""
        try:
            if hasattr(handler, "set_bubble"):
                handler.set_bubble(bool(definition.get("bubble", True)))

            level = self.binder.level(definition.get("level", MINIMUM_LEVEL), context)
            if hasattr(handler, "set_level"):
                handler.set_level(level)
            elif hasattr(handler, "setLevel"):
                handler.setLevel(level)

            if isinstance(handler, RotatingFileHandler) and (
                "filename_format" in definition or "date_format" in definition
            ):
                handler.set_filename_format(
                    definition.get("filename_format", handler.filename_format),
                    definition.get("date_format", handler.date_format),
                )
        except ComponentConstructionFailure:
            raise
        except Exception as e:
            context.fail(f"handlers - {label}: configuring handler failed: {e}", ComponentConstructionFailure, e)
