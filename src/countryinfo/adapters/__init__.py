"""Adapters: storage, push backends, logging and HTTP frameworks."""
