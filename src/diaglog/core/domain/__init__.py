"""Core domain: policy resolution, payload filtering and invocation metadata."""
