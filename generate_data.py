#!/usr/bin/env python3
"""
Tournament Calendar — Data Generator

Fetches the StapuBox sports list and tournament feed, normalizes them, and
writes one JSON data file per (month, sport) plus a manifest, all with day
and month boundaries in India Standard Time. By default writes to
public/data/ for local dev. With --r2, also uploads to Cloudflare R2 storage.
"""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from tournament_calendar.client import load_feeds
from tournament_calendar.config import load_config
from tournament_calendar.feeds import generate_manifest, generate_month_payload
from tournament_calendar.filters import ALL_SPORTS
from tournament_calendar.notify import report_errors


def create_r2_client():
    """Create an S3 client configured for Cloudflare R2."""
    import boto3

    account_id = os.environ["CF_ACCOUNT_ID"]
    access_key = os.environ["R2_ACCESS_KEY_ID"]
    secret_key = os.environ["R2_SECRET_ACCESS_KEY"]

    return boto3.client(
        "s3",
        endpoint_url=f"https://{account_id}.r2.cloudflarestorage.com",
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        region_name="auto",
    )


def upload_to_r2(s3_client, bucket: str, key: str, data: str) -> None:
    """Upload a JSON string to R2."""
    s3_client.put_object(
        Bucket=bucket,
        Key=key,
        Body=data.encode("utf-8"),
        ContentType="application/json",
    )


def write_json(output_dir: Path, key: str, payload: dict) -> str:
    json_str = json.dumps(payload, indent=2, ensure_ascii=False)
    out_path = output_dir / key
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json_str, encoding="utf-8")
    return json_str


def main() -> int:
    use_r2 = "--r2" in sys.argv
    bucket_name = "tournament-calendar-data"
    s3_client = None

    if use_r2:
        try:
            s3_client = create_r2_client()
            print("R2 upload enabled")
        except Exception as e:
            print(f"ERROR: Failed to create R2 client: {e}")
            return 1

    config = load_config()
    output_dir = Path("public/data")
    output_dir.mkdir(parents=True, exist_ok=True)
    cache_dir = Path("cache")

    generated_utc = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    sports, tournaments, errors = load_feeds(config, cache_dir)
    r2_uploads: list[tuple[str, str]] = []  # (key, json_str) pairs to upload

    selectors = [ALL_SPORTS] + [s.id for s in sports]
    for month in config.months:
        print(f"\nBuilding {month}...")
        saved = 0
        for sport_id in selectors:
            key = f"{month}/{str(sport_id).lower()}.json"
            try:
                payload = generate_month_payload(month, tournaments, sport_id, generated_utc)
                r2_uploads.append((key, write_json(output_dir, key, payload)))
                saved += 1
            except Exception as e:
                error_msg = f"Failed to build {month} data for sport {sport_id}: {e}"
                print(f"  ERROR: {error_msg}")
                errors.append(error_msg)
                continue

            if sport_id == ALL_SPORTS:
                print(
                    f"  {len(payload['tournaments'])} tournaments on "
                    f"{len(payload['highlighted_days'])} days"
                )
        print(f"  Saved {saved} files to {output_dir / month}")

    manifest = generate_manifest(config.months, sports, generated_utc)
    r2_uploads.append(("sports.json", write_json(output_dir, "sports.json", manifest)))
    print(f"\nSaved {output_dir / 'sports.json'} ({len(sports)} sports)")

    if use_r2 and s3_client:
        print(f"\nUploading {len(r2_uploads)} files to R2...")
        for key, data in r2_uploads:
            try:
                upload_to_r2(s3_client, bucket_name, key, data)
                print(f"  Uploaded {key}")
            except Exception as e:
                error_msg = f"Failed to upload {key} to R2: {e}"
                print(f"  ERROR: {error_msg}")
                errors.append(error_msg)
        print("R2 upload complete")

    if report_errors("Data generation", errors):
        return 1

    print("\nDone — all data generated successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
