from __future__ import annotations

import unittest

from vectorize_client import (
    ConnectionConfig,
    DimensionMismatch,
    InMemoryTransport,
    InvalidArgument,
    Operation,
    RemoteApiError,
    Vector,
    VectorizeClient,
    batch_vectors,
)

INDEX_RECORD = {
    "name": "docs-1",
    "description": "",
    "config": {"dimensions": 3, "metric": "cosine"},
    "created_on": "2024-07-01T10:00:00.000000Z",
    "modified_on": "2024-07-01T10:00:00.000000Z",
}


class VectorizeClientTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.transport = InMemoryTransport()
        self.client = VectorizeClient(self.transport)
        self.config = ConnectionConfig(account_id="acc-123", api_token="secret-token")

    def assert_no_request_sent(self) -> None:
        self.assertEqual(self.transport.requests, [])


class IndexOperationsTests(VectorizeClientTestCase):
    def test_create_index_returns_result_unchanged(self) -> None:
        self.transport.enqueue_result(INDEX_RECORD)

        created = self.client.create_index(self.config, "docs-1", dimensions=3, metric="cosine")

        request = self.transport.last_request
        self.assertEqual(created, INDEX_RECORD)
        self.assertEqual((request.method, request.path), ("POST", "indexes"))
        self.assertEqual(
            request.json,
            {"name": "docs-1", "config": {"dimensions": 3, "metric": "cosine"}},
        )

    def test_create_index_sends_description_and_normalizes_metric(self) -> None:
        self.transport.enqueue_result(INDEX_RECORD)

        self.client.create_index(
            self.config, "docs-1", dimensions=768, metric="dot", description="Docs"
        )

        self.assertEqual(
            self.transport.last_request.json,
            {
                "name": "docs-1",
                "config": {"dimensions": 768, "metric": "dot-product"},
                "description": "Docs",
            },
        )

    def test_create_index_validation_happens_before_request(self) -> None:
        cases = [
            {"name": "Docs_1", "dimensions": 3},
            {"name": "docs-1", "dimensions": 0},
            {"name": "docs-1", "dimensions": 3, "metric": "manhattan"},
            {"name": "docs-1", "dimensions": 3, "description": 5},
        ]
        for kwargs in cases:
            with self.subTest(kwargs=kwargs):
                name = kwargs.pop("name")
                with self.assertRaises(InvalidArgument) as ctx:
                    self.client.create_index(self.config, name, **kwargs)
                self.assertEqual(ctx.exception.context.operation, Operation.CREATE_INDEX)
        self.assert_no_request_sent()

    def test_list_indexes_unwraps_and_falls_back(self) -> None:
        self.transport.enqueue_result([INDEX_RECORD])
        self.transport.enqueue_result({"indexes": [INDEX_RECORD]})
        self.transport.enqueue_result({"count": 0})

        self.assertEqual(self.client.list_indexes(self.config), [INDEX_RECORD])
        self.assertEqual(self.client.list_indexes(self.config), [INDEX_RECORD])
        self.assertEqual(self.client.list_indexes(self.config), {"count": 0})
        self.assertEqual(self.transport.last_request.path, "indexes")

    def test_get_and_describe_are_identical(self) -> None:
        self.transport.enqueue_result(INDEX_RECORD)
        self.transport.enqueue_result(INDEX_RECORD)

        fetched = self.client.get_index(self.config, "docs-1")
        described = self.client.describe_index(self.config, "docs-1")

        self.assertEqual(fetched, described)
        self.assertEqual(
            [(r.method, r.path) for r in self.transport.requests],
            [("GET", "indexes/docs-1"), ("GET", "indexes/docs-1")],
        )

    def test_missing_index_reports_remote_error(self) -> None:
        self.transport.enqueue_errors({"code": 1003, "message": "index not found"})

        with self.assertRaises(RemoteApiError) as ctx:
            self.client.get_index(self.config, "missing")

        self.assertIn("index not found", str(ctx.exception))
        self.assertEqual(ctx.exception.context.index_name, "missing")
        self.assertEqual(ctx.exception.context.operation, Operation.GET_INDEX)

    def test_delete_index_returns_none(self) -> None:
        self.transport.enqueue_result(None)

        self.assertIsNone(self.client.delete_index(self.config, "docs-1"))
        self.assertEqual(
            (self.transport.last_request.method, self.transport.last_request.path),
            ("DELETE", "indexes/docs-1"),
        )

    def test_get_index_info(self) -> None:
        info = {"dimensions": 3, "vectorCount": 12, "processedUpToMutation": "m-9"}
        self.transport.enqueue_result(info)

        self.assertEqual(self.client.get_index_info(self.config, "docs-1"), info)
        self.assertEqual(self.transport.last_request.path, "indexes/docs-1/info")


class VectorOperationsTests(VectorizeClientTestCase):
    def test_insert_vectors_with_expected_dimensions(self) -> None:
        self.transport.enqueue_result({"mutationId": "m-1"})

        result = self.client.insert_vectors(
            self.config,
            "docs-1",
            [{"id": "v1", "values": [0.1, 0.2, 0.3]}],
            expected_dimensions=3,
        )

        request = self.transport.last_request
        self.assertEqual(result, {"mutationId": "m-1"})
        self.assertEqual((request.method, request.path), ("POST", "indexes/docs-1/insert"))
        self.assertEqual(request.json, {"vectors": [{"id": "v1", "values": [0.1, 0.2, 0.3]}]})

    def test_insert_vectors_dimension_mismatch_names_vector(self) -> None:
        with self.assertRaises(DimensionMismatch) as ctx:
            self.client.insert_vectors(
                self.config,
                "docs-1",
                [{"id": "v1", "values": [0.1, 0.2]}],
                expected_dimensions=3,
            )

        self.assertEqual(ctx.exception.vector_id, "v1")
        self.assertIn("v1", str(ctx.exception))
        self.assertEqual(ctx.exception.context.operation, Operation.INSERT_VECTORS)
        self.assert_no_request_sent()

    def test_upsert_vectors_sends_optional_fields(self) -> None:
        self.transport.enqueue_result({"mutationId": "m-2"})

        self.client.upsert_vectors(
            self.config,
            "docs-1",
            [
                Vector("v1", [1, 0, 0], metadata={"genre": "jazz"}),
                {"id": 2, "values": (0, 1, 0), "namespace": "tenant-a"},
            ],
        )

        self.assertEqual(self.transport.last_request.path, "indexes/docs-1/upsert")
        self.assertEqual(
            self.transport.last_request.json["vectors"],
            [
                {"id": "v1", "values": [1.0, 0.0, 0.0], "metadata": {"genre": "jazz"}},
                {"id": "2", "values": [0.0, 1.0, 0.0], "namespace": "tenant-a"},
            ],
        )

    def test_write_validation_failures(self) -> None:
        cases = [
            [],
            [{"id": "v1", "values": []}],
            [{"values": [0.1]}],
            [{"id": "v1", "values": [10**400]}],
            "v1",
        ]
        for vectors in cases:
            with self.subTest(vectors=vectors):
                with self.assertRaises(InvalidArgument):
                    self.client.upsert_vectors(self.config, "docs-1", vectors)  # type: ignore[arg-type]
        self.assert_no_request_sent()

    def test_batches_can_be_sent_one_call_each(self) -> None:
        vectors = [{"id": f"v{i}", "values": [float(i)]} for i in range(5)]
        for _ in range(3):
            self.transport.enqueue_result({"mutationId": "m"})

        for chunk in batch_vectors(vectors, 2):
            self.client.insert_vectors(self.config, "docs-1", chunk)

        sent = [len(request.json["vectors"]) for request in self.transport.requests]
        self.assertEqual(sent, [2, 2, 1])

    def test_query_vectors_body(self) -> None:
        result = {"count": 1, "matches": [{"id": "v1", "score": 0.99}]}
        self.transport.enqueue_result(result)

        matches = self.client.query_vectors(
            self.config,
            "docs-1",
            [0.1, 0.2, 0.3],
            top_k=10,
            return_values=True,
            return_metadata="all",
            filter={"genre": {"$eq": "jazz"}},
            namespace="tenant-a",
        )

        request = self.transport.last_request
        self.assertEqual(matches, result)
        self.assertEqual((request.method, request.path), ("POST", "indexes/docs-1/query"))
        self.assertEqual(
            request.json,
            {
                "vector": [0.1, 0.2, 0.3],
                "topK": 10,
                "returnValues": True,
                "returnMetadata": "all",
                "filter": {"genre": {"$eq": "jazz"}},
                "namespace": "tenant-a",
            },
        )

    def test_query_vectors_defaults_omit_empty_filter_and_namespace(self) -> None:
        self.transport.enqueue_result({"count": 0, "matches": []})

        self.client.query_vectors(self.config, "docs-1", [1, 0, 0], filter={}, namespace="")

        self.assertEqual(
            self.transport.last_request.json,
            {"vector": [1.0, 0.0, 0.0], "topK": 5, "returnValues": False, "returnMetadata": "none"},
        )

    def test_query_vectors_validation(self) -> None:
        cases = [
            ({"vector": [1, 0, 0], "top_k": 0}, InvalidArgument),
            ({"vector": [1, 0, 0], "top_k": 101}, InvalidArgument),
            ({"vector": [1, 0, 0], "return_metadata": "some"}, InvalidArgument),
            ({"vector": [1, 0, 0], "return_values": "yes"}, InvalidArgument),
            ({"vector": [1, 0, 0], "filter": ["genre"]}, InvalidArgument),
            ({"vector": [], "top_k": 5}, InvalidArgument),
            ({"vector": [10**400, 0, 0]}, InvalidArgument),
            ({"vector": [1, 0], "expected_dimensions": 3}, DimensionMismatch),
        ]
        for kwargs, error in cases:
            with self.subTest(kwargs=kwargs):
                vector = kwargs.pop("vector")
                with self.assertRaises(error):
                    self.client.query_vectors(self.config, "docs-1", vector, **kwargs)
        self.assert_no_request_sent()

    def test_query_vector_by_id_sends_id_as_vector(self) -> None:
        self.transport.enqueue_result({"count": 0, "matches": []})

        self.client.query_vector_by_id(self.config, "docs-1", "v1", top_k=5)

        request = self.transport.last_request
        self.assertEqual((request.method, request.path), ("POST", "indexes/docs-1/query"))
        self.assertEqual(request.json["vector"], "v1")
        self.assertEqual(request.json["id"], "v1")
        self.assertEqual(request.json["topK"], 5)
        self.assertEqual(request.json["returnMetadata"], "none")

    def test_query_vector_by_id_requires_id(self) -> None:
        for vector_id in ["", None, 3]:
            with self.subTest(vector_id=vector_id):
                with self.assertRaises(InvalidArgument):
                    self.client.query_vector_by_id(self.config, "docs-1", vector_id)  # type: ignore[arg-type]
        self.assert_no_request_sent()

    def test_get_vectors_by_ids_unwraps_vectors(self) -> None:
        stored = [{"id": "v1", "values": [0.1, 0.2, 0.3]}]
        self.transport.enqueue_result({"vectors": stored})
        self.transport.enqueue_result(stored)

        self.assertEqual(self.client.get_vectors_by_ids(self.config, "docs-1", ["v1"]), stored)
        self.assertEqual(self.client.get_vectors_by_ids(self.config, "docs-1", ["v1"]), stored)
        self.assertEqual(self.transport.last_request.path, "indexes/docs-1/get_by_ids")
        self.assertEqual(self.transport.last_request.json, {"ids": ["v1"]})

    def test_delete_vectors_by_ids(self) -> None:
        self.transport.enqueue_result({"mutationId": "m-3"})

        result = self.client.delete_vectors_by_ids(self.config, "docs-1", ["v1", "v2"])

        self.assertEqual(result, {"mutationId": "m-3"})
        self.assertEqual(self.transport.last_request.path, "indexes/docs-1/delete_by_ids")
        self.assertEqual(self.transport.last_request.json, {"ids": ["v1", "v2"]})

    def test_delete_vectors_with_empty_ids_fails_before_request(self) -> None:
        with self.assertRaises(InvalidArgument):
            self.client.delete_vectors_by_ids(self.config, "docs-1", [])
        self.assert_no_request_sent()


class MetadataIndexOperationsTests(VectorizeClientTestCase):
    def test_create_metadata_index(self) -> None:
        self.transport.enqueue_result({"mutationId": "m-4"})

        self.client.create_metadata_index(self.config, "docs-1", "genre", "string")

        request = self.transport.last_request
        self.assertEqual(
            (request.method, request.path), ("POST", "indexes/docs-1/metadata_index/create")
        )
        self.assertEqual(request.json, {"propertyName": "genre", "type": "string"})

    def test_create_metadata_index_rejects_unknown_type(self) -> None:
        with self.assertRaises(InvalidArgument) as ctx:
            self.client.create_metadata_index(self.config, "docs-1", "genre", "date")

        self.assertIn("genre", str(ctx.exception))
        self.assertEqual(ctx.exception.context.property_name, "genre")
        self.assert_no_request_sent()

    def test_delete_metadata_index(self) -> None:
        self.transport.enqueue_result({"mutationId": "m-5"})

        self.client.delete_metadata_index(self.config, "docs-1", "genre")

        request = self.transport.last_request
        self.assertEqual(request.path, "indexes/docs-1/metadata_index/delete")
        self.assertEqual(request.json, {"propertyName": "genre"})

    def test_list_metadata_indexes_unwraps(self) -> None:
        listed = [{"propertyName": "genre", "indexType": "String"}]
        self.transport.enqueue_result({"metadataIndexes": listed})

        self.assertEqual(self.client.list_metadata_indexes(self.config, "docs-1"), listed)
        self.assertEqual(self.transport.last_request.method, "GET")
        self.assertEqual(self.transport.last_request.path, "indexes/docs-1/metadata_index/list")


class ListVectorsTests(VectorizeClientTestCase):
    def test_query_string_only_carries_given_params(self) -> None:
        page = {"count": 1, "vectors": [{"id": "v1"}], "isTruncated": False}
        for _ in range(3):
            self.transport.enqueue_result(page)

        self.assertEqual(self.client.list_vectors(self.config, "docs-1"), page)
        first = self.transport.last_request
        self.client.list_vectors(self.config, "docs-1", limit=50)
        second = self.transport.last_request
        self.client.list_vectors(self.config, "docs-1", cursor="abc", limit=10)
        third = self.transport.last_request

        self.assertEqual(first.path, "indexes/docs-1/list")
        self.assertEqual(first.query, {})
        self.assertEqual(second.query, {"limit": ["50"]})
        self.assertEqual(third.query, {"cursor": ["abc"], "limit": ["10"]})
        self.assertTrue(all(r.method == "GET" for r in self.transport.requests))

    def test_rejects_invalid_limit_and_cursor(self) -> None:
        for kwargs in [{"limit": 0}, {"limit": 1001}, {"cursor": 5}]:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(InvalidArgument):
                    self.client.list_vectors(self.config, "docs-1", **kwargs)
        self.assert_no_request_sent()


class IndexNameGuardTests(VectorizeClientTestCase):
    def test_every_index_operation_validates_name_first(self) -> None:
        calls = {
            "get_index": lambda name: self.client.get_index(self.config, name),
            "describe_index": lambda name: self.client.describe_index(self.config, name),
            "delete_index": lambda name: self.client.delete_index(self.config, name),
            "get_index_info": lambda name: self.client.get_index_info(self.config, name),
            "insert_vectors": lambda name: self.client.insert_vectors(
                self.config, name, [{"id": "v1", "values": [1.0]}]
            ),
            "query_vectors": lambda name: self.client.query_vectors(self.config, name, [1.0]),
            "get_vectors_by_ids": lambda name: self.client.get_vectors_by_ids(
                self.config, name, ["v1"]
            ),
            "list_metadata_indexes": lambda name: self.client.list_metadata_indexes(
                self.config, name
            ),
            "list_vectors": lambda name: self.client.list_vectors(self.config, name),
        }
        for label, call in calls.items():
            with self.subTest(operation=label):
                with self.assertRaisesRegex(InvalidArgument, "Bad_Index"):
                    call("Bad_Index")
        self.assert_no_request_sent()

    def test_requests_are_scoped_to_account(self) -> None:
        other = ConnectionConfig(account_id="acc-999", api_token="other-token")
        self.transport.enqueue_result(INDEX_RECORD)
        self.transport.enqueue_result(INDEX_RECORD)

        self.client.get_index(self.config, "docs-1")
        self.client.get_index(other, "docs-1")

        first, second = self.transport.requests
        self.assertEqual(
            first.url,
            "https://api.cloudflare.com/client/v4/accounts/acc-123/vectorize/v2/indexes/docs-1",
        )
        self.assertIn("/accounts/acc-999/", second.url)
        self.assertEqual(second.headers["Authorization"], "Bearer other-token")


if __name__ == "__main__":
    unittest.main()
