"""User-facing interfaces for Sprint Tracker (currently the CLI)."""
