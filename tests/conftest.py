"""
Pytest configuration and fixtures for voyage-enrichment tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import os
from datetime import date, datetime
from typing import Generator

import psycopg
import pytest
from testcontainers.postgres import PostgresContainer

from src.core.models import CostCenterEntry, RawRecord
from src.core.reference import ReferenceResolver
from src.core.rules import EnrichmentSettings


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Docker containers"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that test the full pipeline"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# DOMAIN FIXTURES
# =======================

REFERENCE_ENTRIES = [
    CostCenterEntry(
        cost_center_id="9999",
        department="Production",
        rig_reference="Thunder Horse",
        facility_type="Production",
    ),
    CostCenterEntry(
        cost_center_id="10027",
        department="Logistics",
        rig_reference="Fourchon",
        facility_type="Logistics",
    ),
    CostCenterEntry(
        cost_center_id="7777",
        department="Drilling",
        rig_reference="Stena IceMAX",
        facility_type="Drilling",
    ),
]


@pytest.fixture(scope="session")
def settings() -> EnrichmentSettings:
    """Built-in enrichment settings"""
    return EnrichmentSettings()


@pytest.fixture(scope="session")
def reference_entries() -> list[CostCenterEntry]:
    return list(REFERENCE_ENTRIES)


@pytest.fixture(scope="session")
def resolver(reference_entries, settings) -> ReferenceResolver:
    """Resolver over the sample LC reference table"""
    return ReferenceResolver.from_entries(reference_entries, settings)


@pytest.fixture
def make_record():
    """
    Factory for RawRecords with sensible defaults

    Returns:
        Callable accepting RawRecord field overrides
    """
    counter = {"n": 0}

    def _make(**overrides) -> RawRecord:
        counter["n"] += 1
        fields = {
            "record_id": f"rec-{counter['n']:04d}",
            "location": "Fourchon",
            "event_text": "Loading",
            "parent_event_text": "Cargo Ops",
            "vessel_name": "HOS ACHIEVER",
            "voyage_number": "12",
            "effort_hours": 6.0,
            "event_date": date(2025, 3, 14),
        }
        fields.update(overrides)
        return RawRecord(**fields)

    return _make


@pytest.fixture
def round_trip_records(make_record) -> list[RawRecord]:
    """One voyage visiting Fourchon, Thunder Horse and back"""
    return [
        make_record(location="Fourchon", from_time=datetime(2025, 3, 14, 6, 0)),
        make_record(location="Thunder Horse", from_time=datetime(2025, 3, 14, 18, 0)),
        make_record(location="Fourchon", from_time=datetime(2025, 3, 15, 9, 0)),
    ]


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """
    Start PostgreSQL container for integration tests

    Yields:
        PostgresContainer instance with initialized database
    """
    with PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_enrichment",
        password="test_password",
        dbname="test_logistics",
        driver=None,
    ) as postgres:
        init_sql_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "docker",
            "init-db.sql"
        )

        with open(init_sql_path) as f:
            init_sql = f.read()

        with psycopg.connect(postgres.get_connection_url()) as conn:
            with conn.cursor() as cur:
                cur.execute(init_sql)
            conn.commit()

        yield postgres


@pytest.fixture(scope="function")
def db_connection(postgres_container) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a database connection for a single test

    Yields:
        psycopg Connection object
    """
    with psycopg.connect(postgres_container.get_connection_url()) as conn:
        yield conn
        conn.rollback()


@pytest.fixture(scope="function")
def clean_db(db_connection) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a clean database by truncating all tables before each test

    Yields:
        psycopg Connection object with clean database
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE voyage_events")
        cur.execute("TRUNCATE TABLE cost_allocations RESTART IDENTITY")
    db_connection.commit()

    yield db_connection


@pytest.fixture(scope="function")
def db_pool(postgres_container):
    """
    Open a DatabaseConnectionPool against the test container

    Yields:
        Open DatabaseConnectionPool
    """
    from src.warehouse.connection import DatabaseConnectionPool

    pool = DatabaseConnectionPool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        database="test_logistics",
        user="test_enrichment",
        password="test_password",
    )
    pool.open()

    yield pool

    pool.close()
