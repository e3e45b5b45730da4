"""Talk to the real API using credentials from the environment.

Requires CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "vectorize_client").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from vectorize_client import ConnectionConfig, RemoteApiError, RequestsTransport, VectorizeClient


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    config = ConnectionConfig.from_env()

    with RequestsTransport(timeout=10.0, user_agent="vectorize-client-example") as transport:
        client = VectorizeClient(transport)
        for index in client.list_indexes(config):
            print(index["name"], index.get("config"))
        try:
            client.get_index(config, "does-not-exist")
        except RemoteApiError as exc:
            print("Expected failure:", exc, exc.codes)


if __name__ == "__main__":
    main()
