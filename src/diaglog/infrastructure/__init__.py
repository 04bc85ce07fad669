"""Infrastructure adapters: override sources, settings and log sink setup."""
