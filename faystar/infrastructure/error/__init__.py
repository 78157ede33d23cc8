"""Error classification, logging and fallback handling."""
