from __future__ import annotations

import importlib
import json
import unittest
from unittest.mock import MagicMock, patch

import requests

from vectorize_client import (
    AsyncVectorizeClient,
    ConnectionConfig,
    InMemoryTransport,
    RemoteApiError,
    RequestsTransport,
    TransportError,
    TransportResponse,
    VectorizeClient,
)


def _module_available(name: str) -> bool:
    try:
        importlib.import_module(name)
    except Exception:
        return False
    return True


HAS_HTTPX = _module_available("httpx")

URL = "https://api.example.test/client/v4/accounts/acc-123/vectorize/v2/indexes"


def _fake_response(status_code: int, payload: object) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = json.dumps(payload)
    response.headers = {"Content-Type": "application/json"}
    return response


class RequestsTransportTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = requests.Session()
        self.transport = RequestsTransport(session=self.session, timeout=5.0, user_agent="vz/1")

    def tearDown(self) -> None:
        self.transport.close()

    def test_forwards_request_and_wraps_response(self) -> None:
        with patch.object(
            self.session, "request", return_value=_fake_response(201, {"success": True})
        ) as request:
            response = self.transport.send(
                "POST",
                URL,
                headers={"Authorization": "Bearer t"},
                body=b'{"name":"docs-1"}',
            )

        request.assert_called_once_with(
            "POST",
            URL,
            headers={"Authorization": "Bearer t", "User-Agent": "vz/1"},
            data=b'{"name":"docs-1"}',
            timeout=5.0,
        )
        self.assertIsInstance(response, TransportResponse)
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.ok)
        self.assertEqual(json.loads(response.text), {"success": True})

    def test_connection_failures_become_transport_errors(self) -> None:
        for exc in [requests.ConnectionError("down"), requests.Timeout("slow")]:
            with self.subTest(exc=type(exc).__name__):
                with patch.object(self.session, "request", side_effect=exc):
                    with self.assertRaises(TransportError) as ctx:
                        self.transport.send("GET", URL, headers={})
                self.assertIs(ctx.exception.cause, exc)

    def test_error_status_is_returned_not_raised(self) -> None:
        with patch.object(
            self.session, "request", return_value=_fake_response(404, {"message": "nope"})
        ):
            response = self.transport.send("GET", URL, headers={})

        self.assertFalse(response.ok)
        self.assertEqual(response.status_code, 404)

    def test_client_maps_http_errors_through_requests_transport(self) -> None:
        client = VectorizeClient(self.transport)
        config = ConnectionConfig(
            account_id="acc-123",
            api_token="secret-token",
            api_endpoint="https://api.example.test/client/v4",
        )
        body = {"success": False, "errors": [{"code": 1003, "message": "index not found"}]}

        with patch.object(self.session, "request", return_value=_fake_response(404, body)):
            with self.assertRaises(RemoteApiError) as ctx:
                client.get_index(config, "missing")

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.codes, (1003,))

    def test_default_client_transport_is_requests(self) -> None:
        client = VectorizeClient()
        self.assertIsInstance(client.executor.transport, RequestsTransport)

    def test_context_manager_closes_session(self) -> None:
        session = MagicMock()
        with RequestsTransport(session=session):
            pass
        session.close.assert_called_once_with()


class InMemoryTransportTests(unittest.TestCase):
    def test_replays_in_order_and_records(self) -> None:
        transport = InMemoryTransport([TransportResponse(200, "a")])
        transport.enqueue(TransportResponse(204))

        first = transport.send("GET", URL + "?limit=2", headers={"X": "1"})
        second = transport.send("DELETE", URL, headers={})

        self.assertEqual((first.text, second.status_code), ("a", 204))
        self.assertEqual(transport.pending, 0)
        self.assertEqual(transport.requests[0].path, "indexes")
        self.assertEqual(transport.requests[0].query, {"limit": ["2"]})
        self.assertIsNone(transport.requests[1].json)

    def test_empty_queue_raises_transport_error(self) -> None:
        transport = InMemoryTransport()
        with self.assertRaises(TransportError):
            transport.send("GET", URL, headers={})
        self.assertEqual(len(transport.requests), 1)

    def test_last_request_requires_history(self) -> None:
        with self.assertRaises(LookupError):
            InMemoryTransport().last_request


@unittest.skipUnless(HAS_HTTPX, "httpx is not installed")
class AsyncHttpxTransportTests(unittest.IsolatedAsyncioTestCase):
    async def test_sends_request_through_httpx_client(self) -> None:
        import httpx

        from vectorize_client import AsyncHttpxTransport

        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "result": {"mutationId": "m-1"}})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            client = AsyncVectorizeClient(AsyncHttpxTransport(client=http_client))
            config = ConnectionConfig(account_id="acc-123", api_token="secret-token")

            result = await client.delete_vectors_by_ids(config, "docs-1", ["v1"])

        self.assertEqual(result, {"mutationId": "m-1"})
        self.assertEqual(seen[0].method, "POST")
        self.assertTrue(seen[0].url.path.endswith("/vectorize/v2/indexes/docs-1/delete_by_ids"))
        self.assertEqual(seen[0].headers["authorization"], "Bearer secret-token")
        self.assertEqual(json.loads(seen[0].content), {"ids": ["v1"]})

    async def test_httpx_errors_become_transport_errors(self) -> None:
        import httpx

        from vectorize_client import AsyncHttpxTransport

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
            transport = AsyncHttpxTransport(client=http_client)
            with self.assertRaises(TransportError) as ctx:
                await transport.send("GET", URL, headers={})

        self.assertIsInstance(ctx.exception.cause, httpx.ConnectError)

    async def test_owned_client_is_closed(self) -> None:
        from vectorize_client import AsyncHttpxTransport

        transport = AsyncHttpxTransport(timeout=1.0)
        client = transport._get_client()
        async with transport:
            pass
        self.assertTrue(client.is_closed)


if __name__ == "__main__":
    unittest.main()
