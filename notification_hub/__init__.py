"""Notification dispatch and per-user notification state engine."""
