"""FairLeague — fair round-robin league scheduling and standings."""
