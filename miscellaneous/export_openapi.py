#!/usr/bin/env python3
"""
Export the OpenAPI specification of the Ticket Booking API.

The JSON document can be fed to client generators and API testing tools.
"""

import json
import sys

from ticket_booking.main import app


def export_openapi_spec(output_file: str = "openapi.json") -> bool:
    """Export the OpenAPI specification to a JSON file."""
    try:
        openapi_schema = app.openapi()

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(openapi_schema, f, indent=2, ensure_ascii=False)

        print(f"OpenAPI specification exported to: {output_file}")
        print(f"API version: {openapi_schema.get('info', {}).get('version', 'unknown')}")

        paths = openapi_schema.get('paths', {})
        for path in sorted(paths.keys()):
            methods = list(paths[path].keys())
            print(f"  {path}: {', '.join(method.upper() for method in methods)}")

        return True

    except OSError as e:
        print(f"Failed to export OpenAPI specification: {e}")
        return False


if __name__ == "__main__":
    output = sys.argv[1] if len(sys.argv) > 1 else "openapi.json"
    if not export_openapi_spec(output):
        sys.exit(1)
