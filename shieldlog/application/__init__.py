"""Application layer: interceptors, runtime state and configuration."""
