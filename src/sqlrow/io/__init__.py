"""I/O layer: statement execution against a database."""
