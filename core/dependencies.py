from core.settings import Settings

# Settings singleton
_settings = None


def get_settings() -> Settings:
    """Return the process settings, loading them from the environment on first use."""
    if _settings is None:
        init_settings()
    return _settings


def init_settings(settings: Settings | None = None):
    """Initialize settings singleton."""
    global _settings
    _settings = settings if settings is not None else Settings()


def clear_settings():
    """Clear settings singleton."""
    global _settings
    _settings = None
