from datetime import date

import httpx
import pytest

from roster.config import Settings
from roster.errors import ConfigurationError, MalformedTableError, TransportError
from roster.pipeline import RosterPipeline

from conftest import FEED_URL, PROCESSING_DATE, ROSTER_CSV


def test_load_members(make_pipeline):
    members = make_pipeline().load_members()

    assert [(m.first_name, m.last_name, m.email) for m in members] == [
        ("Ann", "Lee", "ann@x.com"),
        ("Cy", "Ng", "cy@x.com"),
    ]
    assert members[0].join_date == date(2023, 3, 15)
    assert members[0].expiration_date == date(2024, 3, 15)
    assert members[1].join_date == PROCESSING_DATE


def test_each_run_refetches():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, content=ROSTER_CSV)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        pipeline = RosterPipeline(FEED_URL, client=client, clock=lambda: PROCESSING_DATE)
        first = pipeline.load_members()
        second = pipeline.load_members()

    assert len(requests) == 2
    assert first == second


def test_unreachable_feed_raises_instead_of_empty_result():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        pipeline = RosterPipeline(FEED_URL, client=client)
        with pytest.raises(TransportError):
            pipeline.load_members()


def test_malformed_feed_raises(make_pipeline):
    pipeline = make_pipeline(b'a,b,c,d,e,f\n1,"Ann,Lee\n')
    with pytest.raises(MalformedTableError):
        pipeline.load_members()


def test_from_settings():
    settings = Settings(csv_url=FEED_URL, fetch_timeout=3.5)

    pipeline = RosterPipeline.from_settings(settings)

    assert pipeline.feed_url == FEED_URL
    assert pipeline.timeout == 3.5


def test_from_settings_requires_feed_url():
    with pytest.raises(ConfigurationError):
        RosterPipeline.from_settings(Settings())


def test_from_settings_keyword_overrides_settings():
    settings = Settings(csv_url=FEED_URL, fetch_timeout=3.5)

    pipeline = RosterPipeline.from_settings(settings, timeout=1.0)

    assert pipeline.timeout == 1.0
