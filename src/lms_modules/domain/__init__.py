"""Domain layer - entities, services and errors for the module menu."""
