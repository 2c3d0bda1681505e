"""
Configuration constants and default locations.
"""

import os
from pathlib import Path


APP_NAME = "rrsa"

# Key generation
DEFAULT_KEY_SIZE = 4096
MIN_KEY_SIZE = 32
MAX_KEY_SIZE = 4096
DEFAULT_EXPONENT = 65_537        # 2^16 + 1

# Fixed plaintext used to check that a key pair is mathematically related
VALIDATION_PROBE = 12_345_678

# Miller-Rabin witness bases
WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

# Key files
PUBLIC_KEY_EXTENSION = "pub"
PRIVATE_KEY_NAME = "rrsa_key"
PUBLIC_KEY_NAME = f"{PRIVATE_KEY_NAME}.{PUBLIC_KEY_EXTENSION}"

# Codec output files
ENCODED_FILE_NAME = "encrypted.cypher"
DECODED_FILE_NAME = "decrypted.message"

# Environment overrides
HOME_ENV_VAR = "RRSA_HOME"


def default_dir() -> Path:
    """
    Return the default keys directory, creating it if needed.

    Resolution order: ``$RRSA_HOME``, ``$XDG_CONFIG_HOME/rrsa``,
    ``~/.config/rrsa``. Falls back to the current directory when the
    directory cannot be created.
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        directory = Path(override)
    else:
        config_home = os.environ.get("XDG_CONFIG_HOME")
        base = Path(config_home) if config_home else Path.home() / ".config"
        directory = base / APP_NAME

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError:
        return Path.cwd()
    return directory
