"""Store, validation and configuration."""
