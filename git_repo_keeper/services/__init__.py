"""Services used to build repository views."""
