#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from drupal.jsonapi import JSONAPIClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List resources of a Drupal JSON:API collection")
    p.add_argument("base_url", help="Site root, e.g. https://example.com")
    p.add_argument("type", nargs="?", default="node--article")
    p.add_argument("limit", nargs="?", type=int, default=10)
    p.add_argument("--sort", default="-created")
    p.add_argument("--status", type=int, default=None, help="Filter on the status field")
    p.add_argument("--authorization", default=None, help="Authorization header value")
    p.add_argument("--more", type=int, default=0, help="Extra resources to fetch after the first batch")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


def show(resource) -> None:
    title = resource.attributes.get("title") or resource.attributes.get("name") or ""
    print(f"{resource.id:38} | {title}")


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    async with JSONAPIClient(args.base_url, authorization=args.authorization) as client:
        flt = client.filter({"status": args.status}) if args.status is not None else ""
        collection = await client.all(args.type, limit=args.limit, sort=args.sort, filter=flt)

        print("=" * 65)
        print(f"Type  : {args.type}")
        print(f"Limit : {args.limit}")
        print("=" * 65)
        more = await collection.consume(show)
        if more and args.more:
            print("-" * 65)
            more(args.more)
            more = await collection.consume(show)
        print("=" * 65)
        print("More available" if more else "Collection exhausted")


if __name__ == "__main__":
    asyncio.run(main())
