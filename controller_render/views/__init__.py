"""View lookup for controller rendering.

This module resolves logical template and layout paths to invocable handles.
Handles come from a template registry, in memory or backed by Jinja2 files.
"""
