"""Custom exception hierarchy for paledit."""

from __future__ import annotations


class PaletteEditError(Exception):
    """Base class for all custom errors raised by paledit."""


# --- 3-layer hierarchy ---

class DomainError(PaletteEditError):
    """Base class for domain-level errors."""


class InfrastructureError(PaletteEditError):
    """Base class for infrastructure-level errors."""


class ApplicationError(PaletteEditError):
    """Base class for application-level errors."""


# --- Domain errors ---

class InvalidSelectionError(DomainError):
    """Raised when an edit addresses no palette entry at all.

    The edit engine treats an empty selection as a silent no-op; the error is
    only raised by callers that explicitly ask for strict picks.
    """


class PaletteIndexError(DomainError):
    """Raised when a palette index lies outside the palette."""


# --- Infrastructure errors ---

class UndoSystemError(InfrastructureError):
    """Raised when the undo history rejects an implant or a transaction."""


# --- Application errors ---

class NoActiveDocumentError(ApplicationError):
    """Raised when an edit cannot be recorded because no document is open."""


class EditorClosedError(ApplicationError):
    """Raised when an edit reaches a palette editor that was already closed."""


# --- Settings ---

class SettingsError(PaletteEditError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
