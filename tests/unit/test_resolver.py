from __future__ import annotations

import pytest

from live_proxy.state import SessionPhase, SessionState
from live_proxy.errors import UpstreamUnavailableError
from live_proxy.upstream import EndpointResolver
from tests.utils.fakes import FakeConnector, make_upstream_settings


def _urls(resolver: EndpointResolver, state: SessionState) -> list[str]:
    return [c.url for c in resolver.candidates_for(state)]


@pytest.mark.asyncio
async def test_resolver_stops_at_first_open_candidate() -> None:
    connector = FakeConnector()
    resolver = EndpointResolver(connector, make_upstream_settings())
    state = SessionState(model="gemini-2.5-flash", credential="k")
    urls = _urls(resolver, state)
    connector.accept(urls[0])
    connector.accept(urls[1])

    candidate, upstream = await resolver.resolve(state)

    assert connector.attempts == [urls[0]]
    assert candidate.bidi is True
    assert upstream.url == urls[0]
    assert state.phase is SessionPhase.NEGOTIATING
    assert state.candidate_index == 0
    assert state.bidi is True


@pytest.mark.asyncio
async def test_resolver_tries_candidates_in_order_without_retrying() -> None:
    connector = FakeConnector()
    resolver = EndpointResolver(connector, make_upstream_settings())
    state = SessionState(model="gemini-2.5-flash", credential="k")
    urls = _urls(resolver, state)
    connector.accept(urls[-1])

    candidate, _ = await resolver.resolve(state)

    assert connector.attempts == urls
    assert candidate.label == "v1alpha:live"
    assert state.candidate_index == len(urls) - 1
    assert state.candidate_label == "v1alpha:live"
    assert state.bidi is False


@pytest.mark.asyncio
async def test_resolver_raises_when_exhausted() -> None:
    connector = FakeConnector()
    resolver = EndpointResolver(connector, make_upstream_settings())
    state = SessionState(model="m", credential="k")

    with pytest.raises(UpstreamUnavailableError) as exc:
        await resolver.resolve(state)

    assert len(connector.attempts) == 5
    assert exc.value.attempted == ("bidi", "v1beta:connect", "v1beta:live", "v1alpha:connect", "v1alpha:live")


@pytest.mark.asyncio
async def test_resolver_sends_key_as_header_only() -> None:
    connector = FakeConnector()
    resolver = EndpointResolver(connector, make_upstream_settings())
    state = SessionState(model="m", credential="s3cret")
    connector.accept(_urls(resolver, state)[1])

    await resolver.resolve(state)

    assert connector.headers == [{"x-goog-api-key": "s3cret"}, {"x-goog-api-key": "s3cret"}]
    assert all("s3cret" not in url for url in connector.attempts)


@pytest.mark.asyncio
async def test_resolver_url_key_shim() -> None:
    connector = FakeConnector()
    resolver = EndpointResolver(connector, make_upstream_settings(key_in_url=True))
    state = SessionState(model="m", credential="s3cret")
    connector.accept(_urls(resolver, state)[0])

    await resolver.resolve(state)

    assert connector.attempts[0].endswith("?key=s3cret")
    assert connector.headers[0] == {"x-goog-api-key": "s3cret"}
