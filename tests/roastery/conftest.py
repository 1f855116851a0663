import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def roastery_bed():
    from roastery.domain import roastery
    from roastery.utils.db import drop_db, setup_db

    bed = DomainFixture(roastery)
    bed.setup()
    setup_db(roastery)
    yield bed
    drop_db(roastery)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(roastery_bed):
    with roastery_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def voice_client():
    from roastery.voice import FakeVoiceClient, reset_voice_client, set_voice_client

    client = FakeVoiceClient()
    set_voice_client(client)
    yield client
    reset_voice_client()


@pytest.fixture()
def catalogue():
    """Seeded catalogue products keyed by name."""
    from protean import current_domain
    from roastery.catalogue.product import Product
    from roastery.catalogue.seeding import SeedCatalogue

    current_domain.process(SeedCatalogue(), asynchronous=False)
    return {p.name: p for p in current_domain.repository_for(Product)._dao.query.all().items}
