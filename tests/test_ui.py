import pytest

from upload_ai.client import UploadStatus
from upload_ai.config import ClientConfig
from upload_ai.ui import SessionClients, session_clients


@pytest.fixture
def client_config():
    return ClientConfig(api_base_url="http://test")


class TestSessionClients:
    @pytest.mark.asyncio
    async def test_first_event_creates_clients(self, client_config):
        clients = session_clients(None, client_config)

        assert isinstance(clients, SessionClients)
        await clients.upload.aclose()
        await clients.completion.aclose()

    @pytest.mark.asyncio
    async def test_later_events_reuse_session_clients(self, client_config):
        clients = session_clients(None, client_config)

        assert session_clients(clients, client_config) is clients
        await clients.upload.aclose()
        await clients.completion.aclose()

    @pytest.mark.asyncio
    async def test_sessions_do_not_share_state(self, client_config):
        first = session_clients(None, client_config)
        second = session_clients(None, client_config)

        first.upload.state.transition(UploadStatus.CONVERTING)

        assert first.upload is not second.upload
        assert first.completion is not second.completion
        assert second.upload.status is UploadStatus.WAITING
        for clients in (first, second):
            await clients.upload.aclose()
            await clients.completion.aclose()
