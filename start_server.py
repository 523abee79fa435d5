#!/usr/bin/env python3
"""Start the route planner API with uvicorn, honouring the PORT environment variable."""

import os
import sys

import uvicorn

port = os.environ.get("PORT", "8000")

try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

src_path = os.path.join(os.getcwd(), "src")
if os.path.isdir(src_path) and src_path not in sys.path:
    sys.path.insert(0, src_path)

print(f"Starting server on port {port_int}...", file=sys.stderr)
uvicorn.run(
    "route_planner.main:app",
    host="0.0.0.0",
    port=port_int,
    proxy_headers=True,
    forwarded_allow_ips="*",
)
