"""Terminal UI for the seed-track picker (blessed)."""

__all__ = []
