"""Developer helpers (opt-in instrumentation)."""
