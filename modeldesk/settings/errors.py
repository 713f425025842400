# -*- coding: utf-8 -*-
"""Errors raised by the model settings subsystem."""


class ModelSettingsError(Exception):
    """Base class for model settings errors."""


class ModelFormError(ModelSettingsError, ValueError):
    """A required field is missing when committing the model form."""


class StaleEntryError(ModelSettingsError, LookupError):
    """A captured row position or id no longer points at the same entry."""


class ProtectedEntryError(ModelSettingsError):
    """A built-in provider entry was about to be edited or deleted."""
