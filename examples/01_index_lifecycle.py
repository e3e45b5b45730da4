"""Index lifecycle against a scripted in-memory transport."""

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

from vectorize_client import ConnectionConfig, InMemoryTransport, VectorizeClient

INDEX = {
    "name": "docs-1",
    "description": "Product docs",
    "config": {"dimensions": 3, "metric": "cosine"},
    "created_on": "2024-07-01T10:00:00.000000Z",
    "modified_on": "2024-07-01T10:00:00.000000Z",
}


def main() -> None:
    transport = InMemoryTransport()
    client = VectorizeClient(transport)
    config = ConnectionConfig(account_id="demo-account", api_token="demo-token")

    transport.enqueue_result(INDEX)
    transport.enqueue_result({"indexes": [INDEX]})
    transport.enqueue_result(INDEX)
    transport.enqueue_result({"dimensions": 3, "vectorCount": 0})
    transport.enqueue_result(None)

    created = client.create_index(
        config, "docs-1", dimensions=3, metric="cosine", description="Product docs"
    )
    print("Created:", created["name"], created["config"])
    print("Listed:", [index["name"] for index in client.list_indexes(config)])
    print("Described:", client.describe_index(config, "docs-1")["description"])
    print("Info:", client.get_index_info(config, "docs-1"))
    print("Deleted:", client.delete_index(config, "docs-1"))

    for request in transport.requests:
        print(f"  {request.method:6} {request.path}")


if __name__ == "__main__":
    main()
