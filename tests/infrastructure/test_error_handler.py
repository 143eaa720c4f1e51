import logging
from unittest.mock import Mock

from paledit.errors import (
    ApplicationError,
    InfrastructureError,
    NoActiveDocumentError,
    PaletteEditError,
    UndoSystemError,
)
from paledit.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from paledit.events.bus import EventBus


def test_handle_error_logs_and_publishes():
    logger = Mock(spec=logging.Logger)
    event_bus = Mock(spec=EventBus)
    handler = ErrorHandler(logger, event_bus)

    error = UndoSystemError("history locked")
    handler.handle(error, ErrorSeverity.ERROR, {"operation": "Color Change"})

    logger.error.assert_called()
    assert logger.error.call_args.kwargs["extra"] == {"context": {"operation": "Color Change"}}

    event = event_bus.publish.call_args[0][0]
    assert isinstance(event, ErrorOccurredEvent)
    assert event.error is error
    assert event.severity == ErrorSeverity.ERROR
    assert event.context == {"operation": "Color Change"}


def test_severity_selects_log_level():
    logger = Mock(spec=logging.Logger)
    handler = ErrorHandler(logger, Mock(spec=EventBus))

    handler.handle(NoActiveDocumentError("no document"), ErrorSeverity.INFO)

    logger.info.assert_called_once()
    logger.error.assert_not_called()


def test_ui_callback():
    handler = ErrorHandler(Mock(spec=logging.Logger), Mock(spec=EventBus))
    callback = Mock()
    handler.register_ui_callback(callback)

    handler.handle(RuntimeError("ui error"), ErrorSeverity.CRITICAL)

    callback.assert_called_with("ui error", ErrorSeverity.CRITICAL)


def test_ignore_info_severity_in_ui():
    handler = ErrorHandler(Mock(spec=logging.Logger), Mock(spec=EventBus))
    callback = Mock()
    handler.register_ui_callback(callback)

    handler.handle(NoActiveDocumentError("info"), ErrorSeverity.INFO)

    callback.assert_not_called()


def test_error_layers():
    assert issubclass(UndoSystemError, InfrastructureError)
    assert issubclass(NoActiveDocumentError, ApplicationError)
    assert issubclass(ApplicationError, PaletteEditError)
