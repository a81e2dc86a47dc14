"""Core primitives: errors, logging, settings and protocols."""
