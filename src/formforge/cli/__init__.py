"""FormForge command line interface."""
