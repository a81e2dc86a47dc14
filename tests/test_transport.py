"""Tests for rundeck_spine.transport.HttpJobFetcher using httpx.MockTransport."""

import httpx
import pytest

from rundeck_spine.client import JobsClient
from rundeck_spine.core.errors import (
    AuthenticationError,
    MalformedDocumentError,
    TransportError,
    TransportTimeoutError,
)
from rundeck_spine.core.settings import RundeckSettings
from rundeck_spine.transport import AUTH_HEADER, HttpJobFetcher, unwrap_envelope


def _settings(**overrides) -> RundeckSettings:
    values = {"url": "http://rundeck.test", "api_version": 14, "auth_token": "secret"}
    values.update(overrides)
    return RundeckSettings(**values)


def _fetcher(handler, **overrides) -> HttpJobFetcher:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpJobFetcher(_settings(**overrides), client=client)


class TestUrlFor:
    def test_joins_segments_under_api_base(self):
        fetcher = HttpJobFetcher(_settings())
        assert fetcher.url_for(["project", "infra", "jobs"]) == "http://rundeck.test/api/14/project/infra/jobs"

    def test_quotes_segments(self):
        fetcher = HttpJobFetcher(_settings())
        assert fetcher.url_for(["project", "my project/x", "jobs"]) == (
            "http://rundeck.test/api/14/project/my%20project%2Fx/jobs"
        )


class TestFetch:
    def test_sends_token_and_unwraps_envelope(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["token"] = request.headers.get(AUTH_HEADER)
            seen["accept"] = request.headers.get("Accept")
            return httpx.Response(200, content=b'<result success="true"><jobs count="0"/></result>')

        with _fetcher(handler) as fetcher:
            body = fetcher.fetch(["project", "infra", "jobs"])

        assert seen == {
            "url": "http://rundeck.test/api/14/project/infra/jobs",
            "token": "secret",
            "accept": "application/xml",
        }
        assert body == b'<jobs count="0" />'

    def test_no_token_header_without_token(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert AUTH_HEADER not in request.headers
            return httpx.Response(200, content=b"<jobs/>")

        assert _fetcher(handler, auth_token=None).fetch(["project", "p", "jobs"]) == b"<jobs/>"

    def test_query_parameters(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["format"] == "xml"
            return httpx.Response(200, content=b"<jobs/>")

        _fetcher(handler).fetch(["project", "p", "jobs"], {"format": "xml"})

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth_failures(self, status):
        fetcher = _fetcher(lambda request: httpx.Response(status))
        with pytest.raises(AuthenticationError) as exc_info:
            fetcher.fetch(["job", "x"])
        assert exc_info.value.context.http_status == status

    def test_server_error_is_retryable(self):
        fetcher = _fetcher(lambda request: httpx.Response(502))
        with pytest.raises(TransportError) as exc_info:
            fetcher.fetch(["job", "x"])
        assert exc_info.value.retryable is True
        assert exc_info.value.context.url == "http://rundeck.test/api/14/job/x"

    def test_client_error_is_not_retryable(self):
        fetcher = _fetcher(lambda request: httpx.Response(404))
        with pytest.raises(TransportError) as exc_info:
            fetcher.fetch(["job", "x"])
        assert exc_info.value.retryable is False

    def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(TransportTimeoutError) as exc_info:
            _fetcher(handler).fetch(["job", "x"])
        assert isinstance(exc_info.value.cause, httpx.ConnectTimeout)

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            _fetcher(handler).fetch(["job", "x"])
        assert not isinstance(exc_info.value, TransportTimeoutError)


class TestUnwrapEnvelope:
    def test_passes_bare_collection_through(self):
        assert unwrap_envelope(b"<joblist><job/></joblist>") == b"<joblist><job/></joblist>"

    def test_empty_envelope_returned_as_is(self):
        assert unwrap_envelope(b'<result success="true"/>') == b'<result success="true"/>'

    def test_malformed_body(self):
        with pytest.raises(MalformedDocumentError):
            unwrap_envelope(b"<result>")


@pytest.mark.integration
class TestClientOverHttp:
    def test_get_job_detail(self, detail_doc):
        envelope = b'<result success="true">' + detail_doc + b"</result>"
        fetcher = _fetcher(lambda request: httpx.Response(200, content=envelope))
        job = JobsClient(fetcher).get_job_detail("a1b2")
        assert job.name == "nightly-backup"
        assert job.command_sequence.commands[3].job.arguments == "-x value"
