"""Split a large upload into service-sized batches."""

from __future__ import annotations

import random
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "vectorize_client").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from vectorize_client import ConnectionConfig, InMemoryTransport, VectorizeClient, batch_vectors


def main() -> None:
    transport = InMemoryTransport()
    client = VectorizeClient(transport)
    config = ConnectionConfig(account_id="demo-account", api_token="demo-token")

    rng = random.Random(7)
    vectors = [
        {"id": f"doc-{i}", "values": [rng.random() for _ in range(8)]}
        for i in range(2500)
    ]

    batches = batch_vectors(vectors)
    print(f"{len(vectors)} vectors -> {len(batches)} batches of up to {batches.batch_size}")

    for number, chunk in enumerate(batches, start=1):
        transport.enqueue_result({"mutationId": f"m-{number}"})
        result = client.upsert_vectors(config, "docs-1", chunk, expected_dimensions=8)
        print(f"batch {number}: {len(chunk)} vectors, mutation {result['mutationId']}")


if __name__ == "__main__":
    main()
