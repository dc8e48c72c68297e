#!/usr/bin/env python3
"""Helper script to check and create the .env file for the optimizer connection."""

from pathlib import Path
import os
import sys

TEMPLATE = """# Route optimization backend (required)
ROUTEVIEW_OPTIMIZER_BASE_URL=https://router.example.com/api
# ROUTEVIEW_OPTIMIZER_TIMEOUT_SECONDS=300
# ROUTEVIEW_OPTIMIZER_MAX_RETRIES=2

# API Configuration
ROUTEVIEW_API_PREFIX=/api
# ROUTEVIEW_FRONTEND_ALLOWED_ORIGINS - Leave commented to use defaults
# JSON array format: ["http://localhost:3000","http://127.0.0.1:3000"]

# Viewer
# ROUTEVIEW_VIEWPORT_PAGE_SIZE=20
# ROUTEVIEW_DEFAULT_LANGUAGE=en
# ROUTEVIEW_PERSIST_OUTPUTS=false
# ROUTEVIEW_DATA_ROOT=./data
"""


def main() -> int:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Route Viewer Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"[MISSING] .env file NOT found at: {env_file}")
        with open(env_file, "w", encoding="utf-8") as f:
            f.write(TEMPLATE)
        print(f"[OK] Created template .env file at: {env_file}")
        print("     Edit ROUTEVIEW_OPTIMIZER_BASE_URL before starting the server.")
        return 1

    print(f"[OK] Found .env file at: {env_file}")
    env_url = os.getenv("ROUTEVIEW_OPTIMIZER_BASE_URL")
    if env_url:
        print(f"[OK] ROUTEVIEW_OPTIMIZER_BASE_URL (from environment): {env_url}")
    print()

    print("Testing config loading...")
    try:
        sys.path.insert(0, str(project_root / "src"))
        from routeview.config import settings
    except Exception as e:
        print(f"[ERROR] Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return 1

    if not settings.optimizer_base_url:
        print("[ERROR] Optimizer base URL is not configured")
        print("Make sure variables start with the ROUTEVIEW_ prefix and restart the server after editing .env")
        return 1

    print(f"[OK] Optimizer base URL: {settings.optimizer_base_url}")
    print(f"[OK] Timeout: {settings.optimizer_timeout_seconds:.0f}s, retries: {settings.optimizer_max_retries}")
    print(f"[OK] Page size: {settings.viewport_page_size}, language: {settings.default_language}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
