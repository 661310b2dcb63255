"""
Simple script to validate a settings file.

Usage:
    python validate_settings.py browser.yaml
"""

import sys
import logging

import yaml

from settings_loader import load_settings, validate_settings

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def main():
    if len(sys.argv) < 2:
        print("Usage: python validate_settings.py <settings_file>")
        sys.exit(1)

    settings_file = sys.argv[1]

    try:
        logger.info(f"Loading settings: {settings_file}")
        settings = load_settings(settings_file)

        logger.info("✓ Settings loaded successfully")
        network = settings.network
        logger.info(f"  Search URL: {network.search_url}")
        logger.info(f"  Search origin: {network.search_origin}")
        logger.info(f"  User agent: {network.user_agent}")
        logger.info(f"  Timeout: {network.timeout}s")
        logger.info(f"  Max page bytes: {network.max_page_bytes}")
        logger.info(f"  Max search bytes: {network.max_search_bytes}")
        logger.info(f"  Colour: {'on' if settings.display.color else 'off'}")
        logger.info(f"  Max display chars: {settings.display.max_chars}")

        warnings = validate_settings(settings)
        if warnings:
            logger.warning("Validation warnings:")
            for warning in warnings:
                logger.warning(f"  - {warning}")
        else:
            logger.info("✓ No validation warnings")

        logger.info("")
        logger.info(f"Run with: python browser.py --settings {settings_file}")

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        sys.exit(1)
    except (ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid settings: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
