"""Runtime components for talking to the venue."""
