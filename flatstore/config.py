"""
Configuration loading for flatstore
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .models import Config, ServerConfig, StoreConfig, StaticConfig, LoggingConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "flatstore.yaml"


def _number(value: Any, default: float) -> float:
    """Coerce a YAML scalar to a positive number, keeping the default otherwise"""
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid numeric value in configuration: {value!r}")
        return default
    return number if number > 0 else default


def _flag(value: Any, default: bool) -> bool:
    """Accept only real YAML booleans; quoted strings keep the default"""
    if value is None:
        return default
    if not isinstance(value, bool):
        logger.warning(f"Invalid boolean value in configuration: {value!r}")
        return default
    return value


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name)
    return section if isinstance(section, dict) else {}


class ConfigManager:
    """Loads the YAML configuration"""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        self.config_path = Path(config_path).resolve()

    def load_config(self) -> Config:
        """Load configuration from YAML file"""
        try:
            if not self.config_path.exists():
                logger.warning(f"Configuration file not found: {self.config_path}")
                return Config()

            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                logger.warning(f"Configuration root is not a mapping: {self.config_path}")
                data = {}

            config = self._parse_config(data)
            logger.info(f"Configuration loaded from {self.config_path}")
            return config

        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load configuration: {e}")
            return Config()

    def _parse_config(self, data: Dict[str, Any]) -> Config:
        """Parse configuration data into Config object"""

        defaults = Config()

        server_data = _section(data, 'server')
        server = ServerConfig(
            addr=str(server_data.get('addr', defaults.server.addr)),
            port=int(_number(server_data.get('port', defaults.server.port), defaults.server.port)),
            readTimeout=_number(
                server_data.get('readTimeout', defaults.server.readTimeout),
                defaults.server.readTimeout,
            ),
            writeTimeout=_number(
                server_data.get('writeTimeout', defaults.server.writeTimeout),
                defaults.server.writeTimeout,
            ),
        )

        store_data = _section(data, 'store')
        store = StoreConfig(
            path=str(store_data.get('path', defaults.store.path)),
            placeholder=str(store_data.get('placeholder', defaults.store.placeholder)),
            appendOnRead=_flag(store_data.get('appendOnRead'), defaults.store.appendOnRead),
        )

        static_data = _section(data, 'static')
        mount_path = str(static_data.get('mountPath', defaults.static.mountPath))
        static = StaticConfig(
            dir=str(static_data.get('dir', defaults.static.dir)),
            index=str(static_data.get('index', defaults.static.index)),
            mountPath='/' + mount_path.strip('/'),
        )

        logging_data = _section(data, 'logging')
        logging_config = LoggingConfig(
            json=_flag(logging_data.get('json'), defaults.logging.json),
            file=str(logging_data.get('file', defaults.logging.file) or ''),
            level=str(logging_data.get('level', defaults.logging.level)),
            max_size_mb=int(_number(
                logging_data.get('max_size_mb', defaults.logging.max_size_mb),
                defaults.logging.max_size_mb,
            )),
            backup_count=int(_number(
                logging_data.get('backup_count', defaults.logging.backup_count),
                defaults.logging.backup_count,
            )),
        )

        return Config(
            server=server,
            store=store,
            static=static,
            logging=logging_config,
        )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration from file"""
    return ConfigManager(config_path).load_config()
