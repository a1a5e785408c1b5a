"""Use-case layer."""
