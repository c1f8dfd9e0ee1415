"""
User configuration from config.yaml.

Separate from the environment-based Settings in config.py:

config.yaml is for:
- Email signature appended to replies
- Default reply tone
- Senders that always go to human review

.env is for:
- API keys (secrets)
- Token paths, timeouts, retry settings
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")


@dataclass
class UserPreferences:
    """User preferences from config.yaml."""

    default_tone: str = "professional"
    always_review_senders: list[str] = field(default_factory=list)


@dataclass
class UserConfig:
    """Complete user configuration from config.yaml."""

    email: str = ""
    signature: str = ""
    preferences: UserPreferences = field(default_factory=UserPreferences)

    def requires_review(self, sender_email: str) -> bool:
        """
        Check whether a sender is on the always-review list.

        Entries are full addresses or "@domain" suffixes.
        """
        sender = sender_email.lower().strip()
        if not sender:
            return False

        for entry in self.preferences.always_review_senders:
            entry = entry.lower().strip()
            if entry.startswith("@"):
                if sender.endswith(entry):
                    return True
            elif sender == entry:
                return True

        return False


def load_user_config(config_path: Path | str | None = None) -> UserConfig:
    """
    Load user configuration from config.yaml.

    A missing or unreadable file yields defaults.

    Args:
        config_path: Path to config.yaml. Uses ./config.yaml if None.

    Returns:
        UserConfig with loaded or default values.
    """
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        logger.info(f"Config file not found at {config_path}, using defaults")
        return UserConfig()

    try:
        raw_config = yaml.safe_load(config_path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load {config_path}: {e}")
        return UserConfig()

    if not raw_config:
        return UserConfig()

    user_section = raw_config.get("user") or {}
    prefs_section = raw_config.get("preferences") or {}

    return UserConfig(
        email=user_section.get("email", ""),
        signature=(user_section.get("signature") or "").strip(),
        preferences=UserPreferences(
            default_tone=prefs_section.get("default_tone", "professional"),
            always_review_senders=list(prefs_section.get("always_review_senders") or []),
        ),
    )


def append_signature(body: str, signature: str) -> str:
    """Append the email signature to a body, if there is one."""
    if not signature:
        return body

    return f"{body}\n\n--\n{signature}"
