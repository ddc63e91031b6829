"""
Service detection — resolve abstract requirements to concrete engines.

Each table is an ordered sequence of ``(marker, engine)`` pairs matched
by substring against the dependency list. The first entry with any
matching dependency wins, so table order is significant.

Pure logic — no I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pipegen.core.models.facts import ProjectFacts

logger = logging.getLogger(__name__)

DATABASE_MARKERS: tuple[tuple[str, str], ...] = (
    ("Npgsql", "postgres"),
    ("SqlClient", "sqlserver"),
    ("MySql", "mysql"),
)

CACHE_MARKERS: tuple[tuple[str, str], ...] = (
    ("StackExchange.Redis", "redis"),
)

QUEUE_MARKERS: tuple[tuple[str, str], ...] = (
    ("RabbitMQ", "rabbitmq"),
    ("AWSSDK.SQS", "sqs"),
    ("AWSSQS", "sqs"),
)

STORAGE_MARKERS: tuple[tuple[str, str], ...] = (
    ("AWSSDK.S3", "s3"),
    ("AWSS3", "s3"),
)

# ── Engine lookup tables ────────────────────────────────────────
# Unknown keys fall back to the postgres entry.

_FALLBACK_ENGINE = "postgres"

_ENGINE_VERSIONS: dict[str, dict[str, str]] = {
    "terraform": {"postgres": "14", "mysql": "8.0", "sqlserver": "15.00"},
    "cloudformation": {"postgres": "14.6", "mysql": "8.0.28", "sqlserver": "15.00"},
}

_DEFAULT_PORTS: dict[str, int] = {
    "postgres": 5432,
    "mysql": 3306,
    "sqlserver": 1433,
}

_CFN_ENGINE_NAMES: dict[str, str] = {
    "postgres": "postgres",
    "mysql": "mysql",
    "sqlserver": "sqlserver-ex",
}


def first_match(
    dependencies: Iterable[str],
    table: Sequence[tuple[str, str]],
) -> str | None:
    """Return the engine of the first table entry any dependency contains."""
    deps = list(dependencies)
    for marker, engine in table:
        if any(marker in dep for dep in deps):
            return engine
    return None


def detect_services(facts: ProjectFacts) -> dict[str, str]:
    """Map service kinds (database, cache, queue, storage) to engines.

    Kinds with no matching dependency are absent from the result. A
    database is only resolved when the coarse requirement flag is set,
    and an unresolved database is left out rather than defaulted.
    """
    services: dict[str, str] = {}
    deps = facts.dependencies

    if facts.environment.requires_database:
        database = first_match(deps, DATABASE_MARKERS)
        if database:
            services["database"] = database
        else:
            logger.info("Database required but no known client dependency; skipping database")

    for kind, table in (
        ("cache", CACHE_MARKERS),
        ("queue", QUEUE_MARKERS),
        ("storage", STORAGE_MARKERS),
    ):
        engine = first_match(deps, table)
        if engine:
            services[kind] = engine

    logger.debug("Detected services: %s", services)
    return services


def engine_version(db_type: str, platform: str = "terraform") -> str:
    """Default engine version for a database on an IaC platform."""
    table = _ENGINE_VERSIONS.get(platform, _ENGINE_VERSIONS["terraform"])
    return table.get(db_type, table[_FALLBACK_ENGINE])


def default_port(db_type: str) -> int:
    """Default listener port for a database engine."""
    return _DEFAULT_PORTS.get(db_type, _DEFAULT_PORTS[_FALLBACK_ENGINE])


def cloudformation_engine(db_type: str) -> str:
    """RDS ``Engine`` value for a database engine."""
    return _CFN_ENGINE_NAMES.get(db_type, _CFN_ENGINE_NAMES[_FALLBACK_ENGINE])
