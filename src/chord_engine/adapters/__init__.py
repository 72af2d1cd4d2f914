"""UI adapters for the chord engine."""
