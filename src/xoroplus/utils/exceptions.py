"""Custom exceptions for xoroplus."""

from __future__ import annotations


class XoroplusError(Exception):
    """Base exception for xoroplus."""


class ConfigError(XoroplusError):
    """Invalid configuration."""


class StateParseError(XoroplusError, ValueError):
    """Malformed or truncated generator state text."""
