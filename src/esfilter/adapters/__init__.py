"""Adapters – concrete transports."""
