"""Tests for ComponentResolver."""

import logging
from typing import Any

import pytest
import structlog

from logwire.builder.context import ResolutionContext
from logwire.builder.resolver import HANDLER_VARIANTS, ComponentResolver, import_target, target_name_for_type
from logwire.config.store import ConfigurationStore
from logwire.errors import ComponentConstructionFailure, ErrorReporter, MissingTarget, UndefinedReference
from logwire.handlers import BufferHandler, CouchDBHandler, NullHandler, RotatingFileHandler, StreamHandler
from tests.fixtures.targets import (
    MarkerProcessor,
    PlainTarget,
    RecordingHandler,
    WrappingTarget,
    add_marker,
)

DOCUMENT: dict[str, Any] = {
    "handlers": {
        "console": {"type": "Stream", "file": "stderr", "level": "info"},
        "recorder": {"class": "tests.fixtures.targets.RecordingHandler", "label": "named"},
        "buffered": {"type": "Buffer", "handler": "recorder", "buffer_limit": 5},
        "loop": {"type": "Buffer", "handler": "loop"},
        "typeless": {"level": "info"},
    },
    "processors": {
        "marker": {"class": "tests.fixtures.targets.MarkerProcessor", "arguments": ["tag", "x"]},
        "function": {"class": "tests.fixtures.targets.add_marker"},
        "factory": {"class": "tests.fixtures.targets.make_prefixer", "arguments": [">> "]},
        "classless": {"arguments": []},
        "not_callable": {"class": "tests.fixtures.targets.NOT_CALLABLE"},
    },
}


@pytest.fixture
def store() -> ConfigurationStore:
    return ConfigurationStore(DOCUMENT)


@pytest.fixture
def resolver(store: ConfigurationStore) -> ComponentResolver:
    return ComponentResolver(store)


@pytest.fixture
def context(store: ConfigurationStore) -> ResolutionContext:
    return ResolutionContext(channel="app", reporter=ErrorReporter(store.dump))


class TestTargetNaming:
    """Test type -> target class mapping."""

    @pytest.mark.parametrize(
        "handler_type, expected",
        [
            ("Stream", "logwire.handlers.StreamHandler"),
            ("stream", "logwire.handlers.StreamHandler"),
            ("RotatingFile", "logwire.handlers.RotatingFileHandler"),
            ("buffer", "logwire.handlers.BufferHandler"),
            ("CouchDB", "logwire.handlers.CouchDBHandler"),
            ("couchdb", "logwire.handlers.CouchDBHandler"),
            ("null", "logwire.handlers.NullHandler"),
        ],
    )
    def test_convention(self, handler_type: str, expected: str) -> None:
        """Test capitalize + 'Handler' suffix, with variant overrides."""
        assert target_name_for_type(handler_type) == expected

    def test_custom_namespace(self) -> None:
        """Test the namespace is configurable."""
        assert target_name_for_type("Syslog", "myapp.handlers") == "myapp.handlers.SyslogHandler"

    def test_variant_table_keys(self) -> None:
        """Test variants exist for the specially bound types."""
        assert set(HANDLER_VARIANTS) >= {"couchdb", "stream", "buffer"}


class TestImportTarget:
    """Test dotted path imports."""

    def test_module_attribute(self) -> None:
        """Test module.Class imports."""
        assert import_target("logging.StreamHandler") is logging.StreamHandler

    def test_nested_attribute(self) -> None:
        """Test module.Class.attr resolves nested attributes."""
        assert import_target("logwire.levels.Level.DEBUG") == logging.DEBUG

    def test_missing_attribute(self) -> None:
        """Test a missing attribute is an ImportError."""
        with pytest.raises(ImportError, match="no attribute"):
            import_target("logging.NoSuchHandler")

    def test_missing_module(self) -> None:
        """Test an unknown module is an ImportError."""
        with pytest.raises(ImportError):
            import_target("no_such_package.Handler")

    def test_missing_dependency_surfaces(self) -> None:
        """Test a module failing on its own missing dependency reports that dependency."""
        with pytest.raises(ModuleNotFoundError) as exc_info:
            import_target("tests.fixtures.broken_dependency.Unreachable")

        assert exc_info.value.name == "tes"


class TestResolveHandler:
    """Test handler resolution."""

    def test_type_shorthand(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test Stream type binds file, level and bubble."""
        handler = resolver.resolve_handler(
            {"type": "Stream", "file": "/tmp/x.log", "level": "warning", "bubble": False}, context
        )

        assert isinstance(handler, StreamHandler)
        assert handler.url == "/tmp/x.log"
        assert handler.bubble is False
        assert handler.level == logging.WARNING

    def test_named_reference(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a name is looked up in the handlers section."""
        handler = resolver.resolve_handler("console", context)

        assert isinstance(handler, StreamHandler)
        assert handler.level == logging.INFO

    def test_class_target_introspected(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a class target is bound by parameter names."""
        handler = resolver.resolve_handler("recorder", context)

        assert isinstance(handler, RecordingHandler)
        assert handler.label == "named"

    def test_named_reference_builds_fresh_instances(
        self, resolver: ComponentResolver, context: ResolutionContext
    ) -> None:
        """Test named definitions are templates, not shared instances."""
        first = resolver.resolve_handler("recorder", context)
        second = resolver.resolve_handler("recorder", context)

        assert first is not second

    def test_nested_named_handler(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a Buffer's 'handler' reference is resolved recursively."""
        handler = resolver.resolve_handler("buffered", context)

        assert isinstance(handler, BufferHandler)
        assert isinstance(handler.handler, RecordingHandler)
        assert handler.handler.label == "named"
        assert handler.buffer_limit == 5

    def test_nested_inline_handler(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test an inline nested handler definition."""
        handler = resolver.resolve_handler(
            {"class": "tests.fixtures.targets.WrappingTarget", "handler": {"type": "Null"}, "min_level": "error"},
            context,
        )

        assert isinstance(handler, WrappingTarget)
        assert isinstance(handler.handler, NullHandler)
        assert handler.min_level == logging.ERROR

    def test_explicit_arguments(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test 'arguments' bypasses introspection."""
        handler = resolver.resolve_handler(
            {"class": "tests.fixtures.targets.PlainTarget", "arguments": ["a", "b", "c"]}, context
        )

        assert isinstance(handler, PlainTarget)
        assert (handler.first, handler.second, handler.third) == ("a", "b", "c")

    def test_stdlib_handler_gets_level(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test setLevel is used for handlers without set_level."""
        handler = resolver.resolve_handler({"class": "logging.NullHandler", "level": "error"}, context)

        assert isinstance(handler, logging.NullHandler)
        assert handler.level == logging.ERROR

    def test_level_defaults_to_minimum(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test the level setter always runs, defaulting to DEBUG."""
        handler = resolver.resolve_handler({"type": "Stream", "file": "stderr"}, context)

        assert handler.level == logging.DEBUG
        assert handler.bubble is True

    def test_couchdb_receives_raw_definition(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test CouchDB handlers get the whole record as their sole argument."""
        handler = resolver.resolve_handler(
            {"type": "CouchDB", "host": "db.local", "dbname": "logs", "level": "error", "bubble": False}, context
        )

        assert isinstance(handler, CouchDBHandler)
        assert handler.options["host"] == "db.local"
        assert handler.options["type"] == "CouchDB"
        assert handler.url == "http://db.local:5984/logs/"
        assert handler.level == logging.ERROR
        assert handler.bubble is False

    def test_rotating_formats_applied(
        self, resolver: ComponentResolver, context: ResolutionContext, tmp_path
    ) -> None:
        """Test filename/date formats are set after construction."""
        handler = resolver.resolve_handler(
            {
                "type": "RotatingFile",
                "filename": str(tmp_path / "app.log"),
                "max_files": 7,
                "filename_format": "{date}-{filename}",
                "date_format": "%Y-%m",
            },
            context,
        )

        assert isinstance(handler, RotatingFileHandler)
        assert handler.max_files == 7
        assert handler.filename_format == "{date}-{filename}"
        assert handler.date_format == "%Y-%m"

    def test_stream_requires_file(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test the stream variant requires its literal 'file' key."""
        with pytest.raises(ComponentConstructionFailure, match="requires a 'file' entry"):
            resolver.resolve_handler({"type": "Stream"}, context)


class TestResolveHandlerErrors:
    """Test handler resolution failures."""

    def test_undefined_reference(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test an unknown name names the section and reference."""
        with pytest.raises(UndefinedReference) as exc_info:
            resolver.resolve_handler("missing", context)

        message = str(exc_info.value)
        assert message.startswith("app: handlers - missing was referred to")
        assert "config:" in message
        assert "console:" in message

    def test_undefined_nested_reference(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test nested references are checked too."""
        with pytest.raises(UndefinedReference, match="handlers - ghost"):
            resolver.resolve_handler({"type": "Buffer", "handler": "ghost"}, context)

    def test_missing_target(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test neither type nor class is MissingTarget."""
        with pytest.raises(MissingTarget, match="typeless has neither 'type' nor 'class'"):
            resolver.resolve_handler("typeless", context)

    def test_unimportable_class(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test an unknown class is a construction failure."""
        with pytest.raises(ComponentConstructionFailure, match="cannot import 'nowhere.Handler'"):
            resolver.resolve_handler({"class": "nowhere.Handler"}, context)

    def test_unknown_type(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test an unknown type shorthand is a construction failure."""
        with pytest.raises(ComponentConstructionFailure, match="logwire.handlers.TelepathyHandler"):
            resolver.resolve_handler({"type": "Telepathy"}, context)

    def test_constructor_error_is_chained(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test constructor exceptions become ComponentConstructionFailure."""
        with pytest.raises(ComponentConstructionFailure) as exc_info:
            resolver.resolve_handler({"class": "tests.fixtures.targets.ExplodingTarget"}, context)

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_missing_required_argument(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a Buffer without 'handler' fails at construction."""
        with pytest.raises(ComponentConstructionFailure, match="constructing BufferHandler failed"):
            resolver.resolve_handler({"type": "Buffer"}, context)

    def test_setter_error(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test post-construction setter failures are reported."""
        with pytest.raises(ComponentConstructionFailure, match="configuring handler failed"):
            resolver.resolve_handler({"class": "tests.fixtures.targets.BadSetterHandler"}, context)

    def test_self_wrapping_handler(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a handler wrapping itself is reported instead of recursing forever."""
        with pytest.raises(ComponentConstructionFailure, match="wraps itself"):
            resolver.resolve_handler("loop", context)

    def test_invalid_reference_type(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test references must be names or mappings."""
        with pytest.raises(ComponentConstructionFailure, match="must be a name or a mapping"):
            resolver.resolve_handler(42, context)


class TestResolveProcessor:
    """Test processor resolution."""

    def test_class_with_arguments(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a class is instantiated with its arguments."""
        processor = resolver.resolve_processor("marker", context)

        assert isinstance(processor, MarkerProcessor)
        assert processor({}, "info", {}) == {"tag": "x"}

    def test_plain_function_used_as_is(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a function without arguments is the processor itself."""
        assert resolver.resolve_processor("function", context) is add_marker

    def test_factory_function_called(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a function with arguments is called to obtain the processor."""
        processor = resolver.resolve_processor("factory", context)

        assert processor(None, "info", {"event": "hi"}) == {"event": ">> hi"}

    def test_structlog_processor(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test third-party processors resolve by dotted path."""
        processor = resolver.resolve_processor(
            {"class": "structlog.processors.TimeStamper", "arguments": {"fmt": "iso"}}, context
        )

        assert isinstance(processor, structlog.processors.TimeStamper)

    def test_class_without_arguments(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a class without arguments is instantiated with none."""
        processor = resolver.resolve_processor({"class": "tests.fixtures.targets.MarkerProcessor"}, context)

        assert processor.key == "marker"

    def test_missing_class(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test a processor without class is MissingTarget."""
        with pytest.raises(MissingTarget, match="classless has no 'class'"):
            resolver.resolve_processor("classless", context)

    def test_undefined_processor(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test unknown processor names are UndefinedReference."""
        with pytest.raises(UndefinedReference, match="processors - ghost"):
            resolver.resolve_processor("ghost", context)

    def test_not_callable(self, resolver: ComponentResolver, context: ResolutionContext) -> None:
        """Test non-callable processors are rejected."""
        with pytest.raises(ComponentConstructionFailure, match="non-callable int"):
            resolver.resolve_processor("not_callable", context)

    def test_processor_ignores_type_and_setters(
        self, resolver: ComponentResolver, context: ResolutionContext
    ) -> None:
        """Test processors have no type shorthand."""
        with pytest.raises(MissingTarget):
            resolver.resolve_processor({"type": "Marker"}, context)
