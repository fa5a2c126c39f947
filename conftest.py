"""Makes the project root importable when running pytest from a checkout."""
