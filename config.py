"""
Connection settings for the WordPress site, read from the environment.

A ``.env`` file in the working directory is loaded first, without overriding
variables that are already set.
"""

import os

from dotenv import load_dotenv

REQUIRED_VARS = ("WORDPRESS_URL", "WORDPRESS_USERNAME", "WORDPRESS_APP_PASSWORD")
DEFAULT_TIMEOUT = 30


class ConfigError(Exception):
    pass


class Settings:
    def __init__(self, url, username, password, timeout=DEFAULT_TIMEOUT):
        self.url = url.rstrip("/")
        self.username = username
        self.password = password
        self.timeout = timeout

    def __repr__(self):
        # keep the application password out of logs
        return f"Settings(url={self.url!r}, username={self.username!r}, timeout={self.timeout!r})"


def load_settings(dotenv_path=None) -> Settings:
    load_dotenv(dotenv_path=dotenv_path)

    missing = [name for name in REQUIRED_VARS if not os.getenv(name)]
    if missing:
        raise ConfigError(
            f"Missing env vars: make sure {', '.join(missing)} "
            f"{'is' if len(missing) == 1 else 'are'} set"
        )

    raw_timeout = os.getenv("WORDPRESS_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f'WORDPRESS_TIMEOUT must be a number of seconds, got "{raw_timeout}"')

    return Settings(
        os.getenv("WORDPRESS_URL"),
        os.getenv("WORDPRESS_USERNAME"),
        os.getenv("WORDPRESS_APP_PASSWORD"),
        timeout,
    )
