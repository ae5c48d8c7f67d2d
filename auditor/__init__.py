"""Page audit engine: artifacts, audits, computed metrics and the runner."""
