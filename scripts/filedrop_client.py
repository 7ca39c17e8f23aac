#!/usr/bin/env python3
"""
Command-line client for a Filedrop server.

Usage:
    python scripts/filedrop_client.py upload report.pdf
    python scripts/filedrop_client.py upload report.pdf --name q3.pdf --multipart
    python scripts/filedrop_client.py download q3.pdf --output ./q3.pdf
    python scripts/filedrop_client.py list
"""

import argparse
import sys
from pathlib import Path

import httpx


def upload(client: httpx.Client, path: Path, name: str, multipart: bool) -> int:
    """Upload a local file and return the response status."""
    data = path.read_bytes()
    if multipart:
        response = client.post(
            "/upload/mul",
            files={"file": (name, data, "application/octet-stream")},
        )
    else:
        response = client.put("/upload", params={"filename": name}, content=data)
    return response.status_code


def download(client: httpx.Client, name: str, output: Path) -> int:
    """Download a file into ``output`` and return the response status."""
    response = client.get("/download", params={"filename": name})
    if response.status_code == 200:
        output.write_bytes(response.content)
    return response.status_code


def list_files(client: httpx.Client) -> list[str]:
    """Return the filenames stored on the server."""
    response = client.get("/list")
    response.raise_for_status()
    return response.json()


def main() -> int:
    parser = argparse.ArgumentParser(description="Filedrop command-line client")
    parser.add_argument(
        "--url", default="http://localhost:3000", help="Server base URL"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload_parser = subparsers.add_parser("upload", help="Upload a file")
    upload_parser.add_argument("path", type=Path, help="Local file to upload")
    upload_parser.add_argument("--name", help="Storage name (defaults to the file name)")
    upload_parser.add_argument(
        "--multipart", action="store_true", help="Send as a multipart form"
    )

    download_parser = subparsers.add_parser("download", help="Download a file")
    download_parser.add_argument("name", help="Storage name")
    download_parser.add_argument("--output", type=Path, help="Destination path")

    subparsers.add_parser("list", help="List stored files")

    args = parser.parse_args()

    with httpx.Client(base_url=args.url) as client:
        if args.command == "upload":
            status = upload(client, args.path, args.name or args.path.name, args.multipart)
            print(f"upload: {status}")
            return 0 if status == 201 else 1

        if args.command == "download":
            output = args.output or Path(args.name).name
            status = download(client, args.name, Path(output))
            print(f"download: {status}")
            return 0 if status == 200 else 1

        for name in list_files(client):
            print(name)
        return 0


if __name__ == "__main__":
    sys.exit(main())
