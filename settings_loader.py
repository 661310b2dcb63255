"""
Settings loader for the omnibar text browser.

Loads and validates optional YAML settings files that override the
network and display defaults from browser_config.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field
from pathlib import Path
import yaml

import browser_config


@dataclass
class NetworkSettings:
    """Settings for fetching documents and search pages."""
    search_url: str = browser_config.SEARCH_ENGINE_HTML
    search_origin: str = browser_config.SEARCH_ORIGIN
    user_agent: str = browser_config.USER_AGENT
    timeout: float = browser_config.HTTP_TIMEOUT
    max_page_bytes: int = browser_config.MAX_PAGE_BYTES
    max_search_bytes: int = browser_config.MAX_SEARCH_BYTES


@dataclass
class DisplaySettings:
    """Settings for terminal output."""
    color: bool = True
    max_chars: int = browser_config.MAX_DISPLAY_CHARS


@dataclass
class BrowserSettings:
    """
    Complete settings for a browsing session.

    Page size and the result cap are fixed by browser_config and are not
    configurable here.
    """
    network: NetworkSettings = field(default_factory=NetworkSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BrowserSettings':
        """
        Create BrowserSettings from a dictionary (loaded from YAML).

        Args:
            data: Dictionary from YAML file

        Returns:
            BrowserSettings instance

        Raises:
            ValueError: If a section or field has the wrong shape or type
        """
        network = NetworkSettings()
        if 'network' in data:
            network_data = data['network']
            if not isinstance(network_data, dict):
                raise ValueError("'network' must be a dictionary")

            for key in ('search_url', 'search_origin', 'user_agent'):
                if key in network_data:
                    value = network_data[key]
                    if not isinstance(value, str) or not value.strip():
                        raise ValueError(f"'network.{key}' must be a non-empty string")
                    setattr(network, key, value.strip())

            if 'timeout' in network_data:
                timeout = network_data['timeout']
                if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                    raise ValueError("'network.timeout' must be a positive number")
                network.timeout = float(timeout)

            for key in ('max_page_bytes', 'max_search_bytes'):
                if key in network_data:
                    value = network_data[key]
                    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                        raise ValueError(f"'network.{key}' must be a positive integer")
                    setattr(network, key, value)

        display = DisplaySettings()
        if 'display' in data:
            display_data = data['display']
            if not isinstance(display_data, dict):
                raise ValueError("'display' must be a dictionary")

            if 'color' in display_data:
                if not isinstance(display_data['color'], bool):
                    raise ValueError("'display.color' must be true or false")
                display.color = display_data['color']

            if 'max_chars' in display_data:
                max_chars = display_data['max_chars']
                if isinstance(max_chars, bool) or not isinstance(max_chars, int) or max_chars <= 0:
                    raise ValueError("'display.max_chars' must be a positive integer")
                display.max_chars = max_chars

        return cls(network=network, display=display)


def load_settings(file_path: str) -> BrowserSettings:
    """
    Load settings from a YAML file.

    Args:
        file_path: Path to YAML settings file

    Returns:
        BrowserSettings instance

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If settings are invalid
        yaml.YAMLError: If YAML parsing fails
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    # An empty file means "all defaults"
    if data is None:
        return BrowserSettings()

    if not isinstance(data, dict):
        raise ValueError("Settings file must contain a YAML dictionary")

    return BrowserSettings.from_dict(data)


def validate_settings(settings: BrowserSettings) -> List[str]:
    """
    Validate settings and return a list of warnings (not errors).

    Args:
        settings: Settings to validate

    Returns:
        List of warning messages (empty if no warnings)
    """
    warnings = []
    network = settings.network

    for name, url in (('search_url', network.search_url), ('search_origin', network.search_origin)):
        if not url.startswith('http://') and not url.startswith('https://'):
            warnings.append(f"{name} may be invalid (missing http/https): {url}")

    if network.search_origin.endswith('/'):
        warnings.append(f"search_origin should not end with '/': {network.search_origin}")

    if network.timeout > 120:
        warnings.append(f"timeout is very high: {network.timeout}s")

    if network.max_page_bytes > 50 * 1024 * 1024:
        warnings.append(f"max_page_bytes is very high: {network.max_page_bytes}")

    if settings.display.max_chars < 500:
        warnings.append(f"max_chars is very low: {settings.display.max_chars}")

    return warnings
