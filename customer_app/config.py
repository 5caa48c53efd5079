"""Configuration for the customer records app.

All settings come from environment variables; PORT keeps its plain name so
hosting platforms can set it directly.
"""
import os
from dataclasses import dataclass, field


@dataclass
class AppConfig:
    """Application configuration loaded from environment variables."""

    # HTTP
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "3000")))

    # PostgreSQL connection
    db_host: str = field(
        default_factory=lambda: os.environ.get("CUSTOMERS_DB_HOST", "")
    )
    db_port: int = field(
        default_factory=lambda: int(os.environ.get("CUSTOMERS_DB_PORT", "5432"))
    )
    db_name: str = field(
        default_factory=lambda: os.environ.get("CUSTOMERS_DB_NAME", "customers")
    )
    db_user: str = field(
        default_factory=lambda: os.environ.get("CUSTOMERS_DB_USER", "")
    )
    db_password: str = field(
        default_factory=lambda: os.environ.get("CUSTOMERS_DB_PASSWORD", "")
    )
    db_sslmode: str = field(
        default_factory=lambda: os.environ.get("CUSTOMERS_DB_SSLMODE", "prefer")
    )
    connect_timeout_seconds: int = field(
        default_factory=lambda: int(os.environ.get("CUSTOMERS_DB_TIMEOUT", "10"))
    )

    # Pool settings
    pool_min_size: int = field(
        default_factory=lambda: int(os.environ.get("CUSTOMERS_POOL_MIN", "1"))
    )
    pool_max_size: int = field(
        default_factory=lambda: int(os.environ.get("CUSTOMERS_POOL_MAX", "5"))
    )

    # Listing
    default_page_size: int = field(
        default_factory=lambda: int(
            os.environ.get("CUSTOMERS_DEFAULT_PAGE_SIZE", "5")
        )
    )

    def conninfo(self) -> str:
        """Build a psycopg conninfo string.

        User and password are optional so a .pgpass file or PG* environment
        variables can supply them instead.
        """
        parts = [
            f"host={self.db_host}",
            f"port={self.db_port}",
            f"dbname={self.db_name}",
            f"sslmode={self.db_sslmode}",
            f"connect_timeout={self.connect_timeout_seconds}",
        ]
        if self.db_user:
            parts.append(f"user={self.db_user}")
        if self.db_password:
            parts.append(f"password={self.db_password}")
        return " ".join(parts)


config = AppConfig()
