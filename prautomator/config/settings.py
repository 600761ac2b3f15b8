"""
Configuration Settings

Location of the per-user configuration file and its defaults.
"""

import os
from pathlib import Path
from typing import Dict, Optional

CONFIG_ENV_VAR = "PR_AUTOMATOR_CONFIG"

CONFIG_DIR = Path.home() / ".pr-automator"
CONFIG_PATH = CONFIG_DIR / "config.json"

# Keys
AI_PROVIDER = "AI_PROVIDER"
API_KEY = "API_KEY"
MODEL = "MODEL"
REQUEST_TIMEOUT = "REQUEST_TIMEOUT"

CONFIG_KEYS = (AI_PROVIDER, API_KEY, MODEL)

DEFAULT_CONFIG: Dict[str, str] = {
    AI_PROVIDER: "deepseek",
    API_KEY: "",
    MODEL: "deepseek-chat",
}


def resolve_config_path(override: Optional[str] = None) -> Path:
    """
    Pick the config file location.

    Precedence: explicit override, PR_AUTOMATOR_CONFIG, ~/.pr-automator/config.json
    """
    if override:
        return Path(override).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return CONFIG_PATH
