"""Core configuration for the recipe catalog."""
