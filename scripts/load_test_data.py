#!/usr/bin/env python
"""
Script for loading test data into the uploads directory.

This script writes a certificate inventory spreadsheet with a batch of
realistic rows so the API has something to search, sort and page through.
"""

import argparse
import random
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional

from config import settings
from record_store.codec import encode
from record_store.models import ID_FIELD, Record
from utils.logging import logger

HEADERS = [ID_FIELD, "common_name", "issuer", "environment", "owner", "valid_from", "valid_to", "status"]


def generate_certificate_batch(count: int = 100, start_date: Optional[date] = None) -> List[Record]:
    """Generate a batch of certificate inventory rows.

    Args:
        count: Number of rows to generate
        start_date: Earliest issue date (defaults to two years ago)

    Returns:
        List of records with string values
    """
    if not start_date:
        start_date = date.today() - timedelta(days=730)

    issuers = ["DigiCert", "Let's Encrypt", "Sectigo", "GlobalSign", "Internal CA"]
    environments = ["Production", "Staging", "Development", "DR"]
    owners = ["platform", "payments", "identity", "data", "web"]
    hosts = ["api", "auth", "billing", "cdn", "mail", "portal", "search", "vpn"]
    domains = ["example.com", "example.net", "corp.local"]

    records = []
    base_id = 1700000000000
    for index in range(count):
        valid_from = start_date + timedelta(days=random.randint(0, 700))
        valid_to = valid_from + timedelta(days=random.choice([90, 365, 730]))
        status = "Expired" if valid_to < date.today() else "Active"
        records.append(
            {
                ID_FIELD: str(base_id + index),
                "common_name": f"{random.choice(hosts)}{random.randint(1, 20)}.{random.choice(domains)}",
                "issuer": random.choice(issuers),
                "environment": random.choice(environments),
                "owner": random.choice(owners),
                "valid_from": valid_from.isoformat(),
                "valid_to": valid_to.isoformat(),
                "status": status,
            }
        )
    return records


def main():
    parser = argparse.ArgumentParser(description="Write a sample dataset into the uploads directory")
    parser.add_argument("--name", default=settings.default_dataset, help="Dataset file name without extension")
    parser.add_argument("--count", type=int, default=100, help="Number of rows to generate")
    parser.add_argument("--directory", default=settings.uploads_dir, help="Uploads directory")
    args = parser.parse_args()

    directory = Path(args.directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{args.name}.xlsx"

    records = generate_certificate_batch(args.count)
    path.write_bytes(encode(records, HEADERS))
    logger.info(f"Wrote {len(records)} records to {path}")


if __name__ == "__main__":
    main()
