"""Social graph and realtime notification app."""
