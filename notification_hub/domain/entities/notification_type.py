"""Catalog entries describing the kinds of notifications the system emits."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NotificationType:
    """Immutable descriptor registered once at start-up."""

    id: str
    display_name: str
    category: str | None = None
    enabled: bool = True


DEFAULT_NOTIFICATION_TYPES: tuple[NotificationType, ...] = (
    NotificationType("ApplicationUpdateAvailable", "Application update available", "Application"),
    NotificationType("ApplicationUpdateInstalled", "Application update installed", "Application"),
    NotificationType("ServerRestartRequired", "Server restart required", "Application"),
    NotificationType("InstallationFailed", "Installation failed", "Plugin"),
    NotificationType("PluginInstalled", "Plugin installed", "Plugin"),
    NotificationType("PluginUninstalled", "Plugin uninstalled", "Plugin"),
    NotificationType("PluginUpdateInstalled", "Plugin update installed", "Plugin"),
    NotificationType("PluginError", "Plugin error", "Plugin"),
    NotificationType("AudioPlayback", "Audio playback started", "Playback", enabled=False),
    NotificationType("VideoPlayback", "Video playback started", "Playback", enabled=False),
    NotificationType("AudioPlaybackStopped", "Audio playback stopped", "Playback", enabled=False),
    NotificationType("VideoPlaybackStopped", "Video playback stopped", "Playback", enabled=False),
    NotificationType("NewLibraryContent", "New content added", "Library", enabled=False),
    NotificationType("TaskFailed", "Scheduled task failed", "Tasks"),
    NotificationType("UserLockedOut", "User locked out", "User"),
)


__all__ = ["NotificationType", "DEFAULT_NOTIFICATION_TYPES"]
