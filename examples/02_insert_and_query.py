"""Insert, query, fetch, and delete vectors."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "vectorize_client").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from vectorize_client import (
    ConnectionConfig,
    InMemoryTransport,
    ReturnMetadata,
    Vector,
    VectorizeClient,
)


def main() -> None:
    transport = InMemoryTransport()
    client = VectorizeClient(transport)
    config = ConnectionConfig(account_id="demo-account", api_token="demo-token")

    transport.enqueue_result({"mutationId": "m-1"})
    transport.enqueue_result(
        {"count": 1, "matches": [{"id": "v1", "score": 0.99, "metadata": {"genre": "jazz"}}]}
    )
    transport.enqueue_result({"count": 1, "matches": [{"id": "v2", "score": 0.87}]})
    transport.enqueue_result({"vectors": [{"id": "v1", "values": [0.1, 0.2, 0.3]}]})
    transport.enqueue_result({"mutationId": "m-2"})

    mutation = client.upsert_vectors(
        config,
        "docs-1",
        [
            Vector("v1", [0.1, 0.2, 0.3], metadata={"genre": "jazz"}),
            {"id": "v2", "values": [0.3, 0.2, 0.1], "namespace": "tenant-a"},
        ],
        expected_dimensions=3,
    )
    print("Upserted:", mutation)
    print("Sent body:", transport.last_request.json)

    matches = client.query_vectors(
        config,
        "docs-1",
        [0.1, 0.2, 0.3],
        top_k=3,
        return_metadata=ReturnMetadata.ALL,
        filter={"genre": {"$eq": "jazz"}},
    )
    print("Query:", matches)

    neighbours = client.query_vector_by_id(config, "docs-1", "v1", top_k=3)
    print("Query by id:", neighbours, "body:", transport.last_request.json)

    print("Fetched:", client.get_vectors_by_ids(config, "docs-1", ["v1"]))
    print("Deleted:", client.delete_vectors_by_ids(config, "docs-1", ["v1", "v2"]))


if __name__ == "__main__":
    main()
