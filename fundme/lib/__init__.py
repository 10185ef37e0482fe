"""Shared infrastructure: logging, metrics, JSON-RPC and formatting helpers."""
