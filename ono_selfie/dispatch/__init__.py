"""Messaging gateway dispatch (OpenClaw CLI and HTTP transports)."""
