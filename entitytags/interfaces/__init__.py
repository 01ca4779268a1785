"""Interfaces layer: HTTP API and CLI front ends over the services layer."""
