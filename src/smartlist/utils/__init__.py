"""Cross-cutting utilities."""

from .debounce import Debouncer
