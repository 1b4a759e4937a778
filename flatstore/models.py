"""
Data models and constants for flatstore
"""

from dataclasses import dataclass, field


@dataclass
class ServerConfig:
    """Server configuration"""
    addr: str = "127.0.0.1"
    port: int = 8080
    readTimeout: float = 15.0
    writeTimeout: float = 15.0


@dataclass
class StoreConfig:
    """Backing data file configuration"""
    path: str = "data/data.txt"
    placeholder: str = "[]"
    # Append GET request bodies to the store after serving it
    appendOnRead: bool = False


@dataclass
class StaticConfig:
    """Static directory and home document"""
    dir: str = "static"
    index: str = "index.html"
    mountPath: str = "/static"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    json: bool = False
    file: str = ""
    level: str = "INFO"
    max_size_mb: int = 10
    backup_count: int = 3


@dataclass
class Config:
    """Main configuration container"""
    server: ServerConfig = field(default_factory=ServerConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    static: StaticConfig = field(default_factory=StaticConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Body returned for every request-scoped failure
INTERNAL_ERROR_BODY = "Internal server error"

# Common MIME types
MIME_TYPES = {
    '.txt': 'text/plain',
    '.html': 'text/html',
    '.css': 'text/css',
    '.js': 'application/javascript',
    '.json': 'application/json',
    '.xml': 'application/xml',
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.gif': 'image/gif',
    '.ico': 'image/x-icon',
    '.svg': 'image/svg+xml',
}

# Default MIME type for unknown files
DEFAULT_MIME_TYPE = 'application/octet-stream'
