# Bot settings read from the environment / .env file

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


@dataclass
class BotConfig:
    token: Optional[str] = None
    lotto_prefix: str = "!lotto"
    database_path: str = ".db"
    log_level: str = "INFO"
    log_file: Optional[str] = "combined.log"


def load_config(environ: Optional[Mapping[str, str]] = None) -> BotConfig:
    """Build the config from ``environ``, or from os.environ after loading .env."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    defaults = BotConfig()
    return BotConfig(
        token=environ.get('TOKEN'),
        lotto_prefix=(environ.get('LOTTO_PREFIX') or defaults.lotto_prefix).strip().lower(),
        database_path=environ.get('DATABASE_PATH') or defaults.database_path,
        log_level=(environ.get('LOG_LEVEL') or defaults.log_level).upper(),
        log_file=environ.get('LOG_FILE', defaults.log_file) or None,
    )
