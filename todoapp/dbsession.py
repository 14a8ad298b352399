"""
SQLAlchemy DB engine setup
--------------------------

This module's purpose is to present a simple and unencumbered module to include
in order to access the database according to the configured credentials.

No engine is created when the module is imported, since creating one loads
the DBAPI driver for the configured dialect; call :func:`create_sql_engine`
at startup instead.

"""
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.pool import StaticPool
from todoapp.config import config, TodoAppConfig
from todoapp.errors import ConfigurationError
import logging

logger = logging.getLogger(__name__)

DIALECT_MAP = dict(
    postgresql="postgresql",
    postgres="postgresql",
    mariadb="mysql",
    mysql="mysql",
    sqlite="sqlite",
)
"""Map adapter names to dialects, for DBI URL construction"""

DEFAULT_PORTS = dict(postgresql=5432, mysql=3306)


def create_db_url(cfg: TodoAppConfig = None) -> URL:
    """Create a DBI URL for initializing :mod:`SQLAlchemy`

    :param cfg: optional config override

    :raises ConfigurationError: if the configured adapter is not supported

    :returns: `URL <https://docs.sqlalchemy.org/en/20/core/engines.html#sqlalchemy.engine.URL>`_ instance for use in accessing the database

    A non-empty `url` setting (which is where `DATABASE_URL` ends up) is used
    as-is.  For **sqlite**, `db_name` is the path of the database file, and
    an empty name selects a private in-memory database.

    """
    cfg = cfg or config
    database = cfg.database
    if getattr(database, "url", None):
        return make_url(str(database.url))
    if database.adapter not in DIALECT_MAP:
        raise ConfigurationError(
            (
                "Configured database adapter must be one of: "
                f"{', '.join([repr(v) for v in DIALECT_MAP.keys()])}"
            )
        )
    dialect = DIALECT_MAP[database.adapter]
    if dialect == "sqlite":
        return URL.create(dialect, database=str(database.db_name or ""))
    creds = dict(
        password=str(database.db_pass),  # auto encoded
        username=str(database.db_user),
        host=database.db_host or "127.0.0.1",
        port=int(database.db_port or DEFAULT_PORTS[dialect]),
        database=str(database.db_name),
    )
    return URL.create(dialect, **creds)


def create_sql_engine(cfg: TodoAppConfig = None) -> Engine:
    """Create an engine (and so its connection pool) from the config

    In-memory **sqlite** databases exist per connection, so for those a single
    connection is shared by every session.

    """
    url = create_db_url(cfg)
    logger.debug(f"Creating engine for {url!r}")
    if url.get_backend_name() == "sqlite" and url.database in (
        None,
        "",
        ":memory:",
    ):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url)
