"""Configuration — codec defaults and logging setup."""
