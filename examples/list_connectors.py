#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from fivetran.client import ClientOptions, RestApiManager


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List Fivetran groups and their connectors")
    p.add_argument("--max-concurrent", type=int, default=4)
    p.add_argument("--timeout", type=float, default=40.0)
    p.add_argument("--schemas", action="store_true", help="Also fetch each connector's schemas")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    options = ClientOptions(timeout=args.timeout, max_concurrent_requests=args.max_concurrent)
    async with RestApiManager(
        os.environ["FIVETRAN_API_KEY"], os.environ["FIVETRAN_API_SECRET"], options
    ) as api:
        async for group in api.get_groups():
            print("=" * 65)
            print(f"Group {group.id}: {group.name}")
            print("-" * 65)
            async for connector in api.get_connectors(group.id):
                print(f"  {connector.id:24} | {connector.service or '-':20} | {connector.schema_name}")
                if args.schemas:
                    schemas = await api.get_connector_schemas(connector.id)
                    for name in (schemas.schemas if schemas else {}):
                        print(f"      schema: {name}")
        print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
