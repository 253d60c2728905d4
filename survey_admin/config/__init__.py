"""Configuration for the survey admin console."""
