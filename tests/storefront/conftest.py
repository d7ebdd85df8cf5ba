import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def email_channel():
    """A fresh FakeEmailAdapter for every test."""
    from storefront.notifications.channel import get_email_channel, reset_email_channel

    reset_email_channel()
    yield get_email_channel()
    reset_email_channel()


@pytest.fixture()
def fanout():
    """A live status fan-out, attached for the duration of the test."""
    from storefront.notifications.realtime.fanout import StatusFanout, attach_fanout, detach_fanout
    from storefront.notifications.realtime.registry import ChannelRegistry

    fanout = StatusFanout(ChannelRegistry())
    attach_fanout(fanout)
    yield fanout
    detach_fanout()
    fanout.close()


@pytest.fixture()
def widget_id():
    """Id of a persisted product named "Widget"."""
    from storefront.catalogue.management import AddProduct

    return current_domain.process(
        AddProduct(product_name="Widget", price=9.99, created_by="seller-1"),
        asynchronous=False,
    )
