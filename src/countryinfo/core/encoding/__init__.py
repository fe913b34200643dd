"""Encoders for the scrape endpoint and the push backends."""
