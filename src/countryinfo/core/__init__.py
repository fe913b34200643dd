"""Core domain: fact tables, lookups, metric helpers and encoders."""
