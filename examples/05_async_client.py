"""Async client usage with concurrent requests."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "vectorize_client").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from vectorize_client import AsyncVectorizeClient, ConnectionConfig, InMemoryTransport


async def main() -> None:
    transport = InMemoryTransport()
    client = AsyncVectorizeClient(transport)
    config = ConnectionConfig(account_id="demo-account", api_token="demo-token")

    for name in ("docs-1", "docs-2", "docs-3"):
        transport.enqueue_result({"dimensions": 3, "vectorCount": len(name)})

    infos = await asyncio.gather(
        *(client.get_index_info(config, name) for name in ("docs-1", "docs-2", "docs-3"))
    )
    for request, info in zip(transport.requests, infos):
        print(request.path, "->", info)


if __name__ == "__main__":
    asyncio.run(main())
