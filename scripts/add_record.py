#!/usr/bin/env python3
"""
Add a record straight to the vault file, without the HTTP server running.

Usage:
  python scripts/add_record.py --name github --type login --password s3cret \
      [--description "work account"] [--additional "2fa on"] [--favorite] [--config config.yaml]
"""
from __future__ import annotations

import argparse
import sys

from passkeep.app import build_record_service
from passkeep.core.config import load_settings
from passkeep.domain.records import Record
from passkeep.domain.validation import validate_name
from passkeep.repositories.json_storage import StorageReadError


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Add a record to the vault file")
    ap.add_argument("--name", required=True, help="Record name (4-100 chars, stored lower-cased)")
    ap.add_argument("--type", required=True, help="Record type (must be in record_types)")
    ap.add_argument("--password", default="", help="Secret to store")
    ap.add_argument("--description", default="")
    ap.add_argument("--additional", default="")
    ap.add_argument("--favorite", action="store_true")
    ap.add_argument("--config", help="YAML config file (default: config.yaml)")
    args = ap.parse_args(argv)

    settings = load_settings(args.config)
    svc = build_record_service(settings)
    try:
        svc.load_from_file()
    except StorageReadError:
        # first record: the file is created by the append below
        pass

    record = Record(
        type=args.type,
        password=args.password,
        description=args.description,
        additional=args.additional,
        favorite=args.favorite,
    )
    svc.append(args.name, record)
    print("OK: record stored")
    print(f"  Name: {validate_name(args.name)}")
    print(f"  Type: {record.type}")
    print(f"  File: {settings.file_path}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
