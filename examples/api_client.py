"""Example API client for the DocTool Studio FastAPI surface.

Run against a local server:

    python examples/api_client.py --host http://127.0.0.1:8000 --tool ocr scan.png report.pdf

The script prints the tool's accepted types, then asks the service whether each
named file would be accepted by the tool's intake screen.
"""

from __future__ import annotations

import argparse
from typing import Dict, Iterable, List, Optional

import requests

DEFAULT_HOST = "http://127.0.0.1:8000"


def build_validate_payload(filename: str, *, source: str = "browse") -> Dict[str, object]:
    """Construct a request body for POST /v1/tools/{tool_id}/validate."""
    if source not in {"browse", "drop"}:
        raise ValueError(f"Unknown source: {source}")
    return {"filename": filename, "source": source}


def build_headers(api_key: Optional[str] = None) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["X-API-Key"] = api_key
    return headers


def fetch_tool(host: str, tool_id: str, api_key: Optional[str] = None) -> Dict[str, object]:
    response = requests.get(
        f"{host.rstrip('/')}/v1/tools/{tool_id}",
        headers=build_headers(api_key),
        timeout=15,
    )
    response.raise_for_status()
    return response.json()


def validate_files(
    host: str,
    tool_id: str,
    filenames: Iterable[str],
    *,
    source: str = "browse",
    api_key: Optional[str] = None,
) -> List[Dict[str, object]]:
    results: List[Dict[str, object]] = []
    url = f"{host.rstrip('/')}/v1/tools/{tool_id}/validate"
    for filename in filenames:
        response = requests.post(
            url,
            json=build_validate_payload(filename, source=source),
            headers=build_headers(api_key),
            timeout=15,
        )
        response.raise_for_status()
        results.append(response.json())
    return results


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check file names against a DocTool Studio tool.")
    parser.add_argument("filenames", nargs="+", help="File names to validate")
    parser.add_argument("--host", default=DEFAULT_HOST, help="API host (default: http://127.0.0.1:8000)")
    parser.add_argument("--api-key", default=None, help="Optional API key for authenticated deployments")
    parser.add_argument("--tool", default="document-to-pdf", help="Tool identifier")
    parser.add_argument("--source", default="browse", choices=["browse", "drop"], help="Acquisition path")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    tool = fetch_tool(args.host, args.tool, api_key=args.api_key)
    accepted = ", ".join(tool.get("accepted_extensions") or []) or "any file"
    print(f"{tool.get('title')} ({args.tool}) accepts: {accepted}")

    for result in validate_files(args.host, args.tool, args.filenames, source=args.source, api_key=args.api_key):
        if result.get("accepted"):
            print(f"  OK    {result['filename']} -> {result.get('processing_path')}")
        else:
            print(f"  FAIL  {result['filename']}: {result.get('error')}")


if __name__ == "__main__":
    main()
