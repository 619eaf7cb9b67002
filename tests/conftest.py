from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from crossclient import ApiEngine, ConnectionProvider, Credentials, EngineConfig
from crossclient.session import SessionState
from tests.helpers import ENDPOINT, GATEWAY_URL, GatewayStub

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def gateway() -> GatewayStub:
    """Create a fake gateway with no route."""
    return GatewayStub()


@pytest.fixture
def provider(gateway: GatewayStub) -> Generator[ConnectionProvider, None, None]:
    """Create a connection provider talking to the fake gateway."""
    provider = ConnectionProvider(transport=httpx.MockTransport(gateway))
    yield provider
    provider.close()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        base_address=GATEWAY_URL,
        client_id="c1",
        application_code=7,
        shared_secret="s1",
        username="jdoe",
        password="pa55",
    )


@pytest.fixture
def config() -> EngineConfig:
    """Create a config with the authentication switch on."""
    return EngineConfig(settings={"IsAuthenticationEnabled": "true"})


@pytest.fixture
def session(credentials: Credentials) -> SessionState:
    return SessionState(credentials=credentials, client_ip_address="10.0.0.1")


@pytest.fixture
def ready_session(session: SessionState) -> SessionState:
    """Create a session that completed the handshake."""
    session.current_endpoint = ENDPOINT
    session.current_token = "t0k3n"
    return session


@pytest.fixture
def engine(
    credentials: Credentials, config: EngineConfig, provider: ConnectionProvider
) -> ApiEngine:
    return ApiEngine(
        credentials, client_ip_address="10.0.0.1", config=config, connection=provider
    )


@pytest.fixture
def ready_engine(engine: ApiEngine) -> ApiEngine:
    """Create an engine that completed the handshake."""
    engine.current_endpoint = ENDPOINT
    engine.session.current_token = "t0k3n"
    return engine
