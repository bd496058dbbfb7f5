"""Roughtime client building blocks: key decoding, server lists, causality checks, reports and load statistics."""

__version__ = "2.0.0"