from datetime import date

import httpx
import pytest

from roster.pipeline import RosterPipeline

FEED_URL = "https://example.test/roster.csv"
PROCESSING_DATE = date(2024, 6, 1)

ROSTER_CSV = (
    "id,first,last,email,phone,joined\n"
    "1, Ann ,Lee, ann@x.com ,555-0100,15/03/2023\n"
    "2,Bo,Kim,bo@x.com\n"
    "3,Cy,Ng,cy@x.com,555-0102,not-a-date\n"
).encode("utf-8")


def csv_transport(body: bytes, status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=body, headers={"content-type": "text/csv"})

    return httpx.MockTransport(handler)


@pytest.fixture
def make_pipeline():
    clients = []

    def factory(body: bytes = ROSTER_CSV, status_code: int = 200) -> RosterPipeline:
        client = httpx.Client(transport=csv_transport(body, status_code))
        clients.append(client)
        return RosterPipeline(FEED_URL, client=client, clock=lambda: PROCESSING_DATE)

    yield factory
    for client in clients:
        client.close()
