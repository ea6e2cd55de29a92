"""Keyboard event parsing and handlers."""

from .seed_search import handle_seed_search_key
from .utils import parse_key
