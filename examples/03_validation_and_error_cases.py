"""Local validation failures and normalized service errors."""

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

from vectorize_client import ConnectionConfig, InMemoryTransport, TransportResponse, VectorizeClient


def expect_error(label: str, fn) -> None:  # noqa: ANN001
    try:
        fn()
    except Exception as exc:  # noqa: BLE001
        print(f"[OK] {label}: {type(exc).__name__}: {exc}")
    else:
        print(f"[UNEXPECTED] {label}: no exception raised")


def validation_demo(client: VectorizeClient, config: ConnectionConfig) -> None:
    expect_error(
        "invalid index name",
        lambda: client.create_index(config, "Docs_1", dimensions=3),
    )
    expect_error(
        "dimension mismatch on insert",
        lambda: client.insert_vectors(
            config, "docs-1", [{"id": "v1", "values": [0.1, 0.2]}], expected_dimensions=3
        ),
    )
    expect_error("topK out of range", lambda: client.query_vectors(config, "docs-1", [1, 0, 0], top_k=500))
    expect_error("empty id list", lambda: client.delete_vectors_by_ids(config, "docs-1", []))
    expect_error(
        "unknown metadata index type",
        lambda: client.create_metadata_index(config, "docs-1", "genre", "date"),
    )


def remote_error_demo(client: VectorizeClient, transport: InMemoryTransport, config: ConnectionConfig) -> None:
    transport.enqueue_errors({"code": 1003, "message": "index not found"})
    expect_error("missing index", lambda: client.get_index(config, "missing"))

    transport.enqueue_json({"message": "Too many requests"}, status_code=429)
    expect_error("rate limited", lambda: client.list_indexes(config))

    transport.enqueue(TransportResponse(status_code=502, text="<html>Bad gateway</html>"))
    expect_error("unparseable gateway error", lambda: client.list_indexes(config))

    transport.enqueue(ConnectionRefusedError("connection refused"))
    expect_error("network failure", lambda: client.list_indexes(config))


def main() -> None:
    transport = InMemoryTransport()
    client = VectorizeClient(transport)
    config = ConnectionConfig(account_id="demo-account", api_token="demo-token")

    validation_demo(client, config)
    print("Requests sent during validation demo:", len(transport.requests))
    remote_error_demo(client, transport, config)


if __name__ == "__main__":
    main()
