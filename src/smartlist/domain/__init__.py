"""Domain layer: smart playlist rules and seed-track selection."""
