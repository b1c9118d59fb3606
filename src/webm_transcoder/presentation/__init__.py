"""Presentation layer: function handler and CLI."""
