"""Database engine factory for the scheduler state."""

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from batchsync.log import get_logger
from batchsync.models.rows import SchedulerStateRow
from batchsync.types import Environment

logger = get_logger(__name__)

IN_MEMORY_DATABASE_URL = "sqlite:///:memory:"


def setup_database_url(environment: Environment, db_path: Path | None = None) -> str:
    """Construct database URL based on environment configuration.

    Args:
        environment: Environment type
        db_path: Optional custom database path. If provided, overrides default path.

    Returns:
        Database connection URL
    """
    if environment == Environment.TESTING:
        return IN_MEMORY_DATABASE_URL

    if db_path is not None:
        db_path = Path(db_path)
    elif environment == Environment.PRODUCTION:
        db_path = Path("db", "batchsync.db")
    elif environment == Environment.DEVELOPMENT:
        db_path = Path("db", "batchsync.dev.db")
    else:
        raise ValueError(f"Unknown environment: {environment}")

    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path}"


def create_state_engine(
    environment: Environment,
    echo: bool = False,
    db_path: Path | None = None,
) -> Engine:
    """Create the scheduler state engine for an environment.

    Args:
        environment: Environment type
        echo: Enable SQL echo for debugging
        db_path: Optional custom database path

    Returns:
        Configured SQLModel engine
    """
    database_url = setup_database_url(environment, db_path)
    logger.info(f"Creating state database engine for: {database_url}")

    if database_url == IN_MEMORY_DATABASE_URL:
        # One shared connection, otherwise every session sees an empty database
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        database_url,
        echo=echo,
        connect_args={
            "check_same_thread": False,
            "timeout": 60.0,
        },
        pool_pre_ping=True,
    )


def create_state_tables(engine: Engine) -> None:
    """Create the scheduler state table."""
    SQLModel.metadata.create_all(engine, tables=[SchedulerStateRow.__table__])
    logger.info(f"> Created table for {SchedulerStateRow.__tablename__}")
