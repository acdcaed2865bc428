#!/usr/bin/env uv run
# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "condcache",
# ]
#
# [tool.uv.sources]
# condcache = { path = "../", editable = true }
# ///

import asyncio

from condcache import AsyncConditionalClient, ConditionalCache


async def fetch_and_print(client: AsyncConditionalClient, path: str) -> None:
    print(f"\n➡ Sending request to {path}...")
    response, body = await client.get(path)

    print(f"📡 Status Code: {response.status_code}")
    print(f"🏷  ETag: {response.headers.get('etag')}")
    print(f"📦 Items: {len(body)}")


async def main() -> None:
    path = "/repos/encode/httpx/issues"
    cache = ConditionalCache()
    async with AsyncConditionalClient(cache=cache) as client:
        await fetch_and_print(client, path)
        # The second request carries If-None-Match and is answered with 304.
        await fetch_and_print(client, path)


if __name__ == "__main__":
    asyncio.run(main())
