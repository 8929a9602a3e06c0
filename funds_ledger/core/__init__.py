"""Configuration, logging and wiring."""
