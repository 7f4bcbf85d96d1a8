import httpx
import pytest

import main
from msgraph_snippets.exception_handler import ErrorHandler
from msgraph_snippets.graph.config import GraphSettings
from msgraph_snippets.graph.errors import RequestFailed
from msgraph_snippets.graph.models import GraphResponse
from msgraph_snippets.snippet import SnippetRegistry, get_users_snippets


class _StubGraphClient:
    fail_filtered = False

    def __init__(self, settings):
        self.settings = settings

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def get_users(self):
        return GraphResponse(value={"value": []}, raw=None)

    async def get_filtered_users(self, filter_expression):
        if self.fail_filtered:
            raise RequestFailed(httpx.ReadTimeout("timed out"))
        return GraphResponse(value={"value": []}, raw=None)


@pytest.fixture(autouse=True)
def _patch_graph_client(monkeypatch):
    _StubGraphClient.fail_filtered = False
    monkeypatch.setattr(main, "GraphClient", _StubGraphClient)


@pytest.mark.asyncio
async def test_run_all_leaves_skipped_entries_out_of_the_total():
    registry = SnippetRegistry(get_users_snippets())
    handler = ErrorHandler()

    tally = await main._run_all(registry, GraphSettings(access_token="t"), None, handler)

    assert tally == main.RunTally(succeeded=2, failed=0, skipped=1)
    assert tally.summary() == "2/2 snippets succeeded, 1 skipped"
    assert handler.format_error_report() == ""


@pytest.mark.asyncio
async def test_run_all_records_failures_and_keeps_going():
    _StubGraphClient.fail_filtered = True
    registry = SnippetRegistry(get_users_snippets())
    handler = ErrorHandler()

    tally = await main._run_all(registry, GraphSettings(access_token="t"), "users", handler)

    assert tally == main.RunTally(succeeded=1, failed=1, skipped=1)
    assert tally.summary() == "1/2 snippets succeeded, 1 skipped"
    assert handler.get_error_summary()["failed_snippets"][0]["snippet"] == (
        "users.get_organization_filtered_users"
    )
