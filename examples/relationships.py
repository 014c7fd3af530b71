#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from drupal.jsonapi import JSONAPIClient, JSONAPIError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Print articles with their author and tags")
    p.add_argument("base_url", help="Site root, e.g. https://example.com")
    p.add_argument("limit", nargs="?", type=int, default=5)
    p.add_argument("--tags", type=int, default=3, help="Tags to show per article")
    p.add_argument("--authorization", default=None)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    relationships = {
        "author": "uid",
        "tags": {"field": "field_tags", "limit": args.tags},
    }

    async def show(article, related) -> None:
        authors: list[str] = []
        tags: list[str] = []
        try:
            await related["author"].consume(lambda user: authors.append(user.attributes.get("name", "")))
            await related["tags"].consume(lambda term: tags.append(term.attributes.get("name", "")))
        except JSONAPIError as e:
            print(f"  ! {article.id}: {e}")
        print(f"{article.attributes.get('title', ''):40} | {', '.join(authors):15} | {', '.join(tags)}")

    async with JSONAPIClient(args.base_url, authorization=args.authorization) as client:
        collection = await client.all(
            "node--article", limit=args.limit, sort="-created", relationships=relationships
        )
        await collection.consume(show, preserve_order=True)


if __name__ == "__main__":
    asyncio.run(main())
