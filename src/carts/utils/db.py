"""Schema management for relational cart stores (SQLite, PostgreSQL).

The memory provider needs no schema, so it is skipped.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

_RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for name, provider in domain.providers.items():
        if provider.conn_info["provider"] in _RELATIONAL_PROVIDERS:
            yield name, provider


def _register_tables(domain: Domain, provider_name: str) -> None:
    # Building a DAO is what declares the element's table on the provider metadata
    records = [*domain.registry.aggregates.values(), *domain.registry.entities.values()]
    for record in records:
        if record.cls.meta_.provider == provider_name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> list[str]:
    """Create cart and line item tables. Returns the providers touched."""
    touched = []
    with domain.domain_context():
        for name, provider in _relational_providers(domain):
            _register_tables(domain, name)
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))
            touched.append(name)
    return touched


def drop_db(domain: Domain) -> list[str]:
    """Drop every table the carts domain created. Returns the providers touched."""
    touched = []
    with domain.domain_context():
        for name, provider in _relational_providers(domain):
            _register_tables(domain, name)
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
            touched.append(name)
    return touched
