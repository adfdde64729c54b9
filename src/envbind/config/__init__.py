"""envbind's own configuration: CLI settings and logging setup."""
