from __future__ import annotations


class MissilesError(Exception):
    """Base class for errors raised by the missiles plugin and its host."""


class ConfigError(MissilesError):
    """The plugin configuration file is missing values or holds invalid ones."""


class UnknownWorldError(MissilesError):
    """A location refers to a world the host has not loaded."""
