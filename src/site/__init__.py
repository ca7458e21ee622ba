"""Site-wide settings."""
