"""Rally simulation and score charts built on the scorer engine."""
