#!/usr/bin/env python3
"""
Seed script: creates items via the API (no direct DB).
Each item gets a small random image, so most uploads produce distinct image files;
repeated category names exercise get-or-create.
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --items 200
"""

import argparse
import os
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"

NAMES = [
    "used iPhone 16e", "MacBook Pro", "mechanical keyboard", "wireless mouse", "bluetooth headphones",
    "27 inch monitor", "HD webcam", "denim jacket", "running shoes", "leather bag",
    "coffee maker", "electric kettle", "toaster", "blender", "air fryer",
    "python programming book", "web design book", "smart watch", "power bank", "tripod",
]

CATEGORIES = ["phone", "computer", "fashion", "kitchen", "books", "accessories"]


def random_image() -> bytes:
    """JPEG magic bytes followed by noise. Content only matters for the file name."""
    return b"\xff\xd8\xff\xe0" + os.urandom(64)


def main():
    ap = argparse.ArgumentParser(description="Seed items via API")
    ap.add_argument("--items", type=int, default=50, help="Number of items to create")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created_items = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.items} items...")
        for i in range(args.items):
            name = random.choice(NAMES)
            try:
                r = client.post(
                    "/items",
                    data={"name": name, "category": random.choice(CATEGORIES)},
                    files={"image": (f"{i}.jpg", random_image(), "image/jpeg")},
                )
                if r.status_code in (200, 201):
                    created_items += 1
                else:
                    errors.append(f"Item {name}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"Item {name}: {e}")
            if (i + 1) % 10 == 0:
                print(f"  ... {i+1} items")

    print(f"\nDone. Items created: {created_items}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
