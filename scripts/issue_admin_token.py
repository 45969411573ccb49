#!/usr/bin/env python3
"""
Print a signed admin JWT for local development.

    python scripts/issue_admin_token.py 1 alice
    curl -H "Authorization: Bearer $TOKEN" localhost:8000/api/admin/court/all
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from court_admin.dependencies import create_jwt  # noqa: E402


def main(argv: list[str]) -> int:
    if len(argv) != 2 or not argv[0].isdigit():
        print("usage: issue_admin_token.py <admin_id> <admin_name>", file=sys.stderr)
        return 2
    print(create_jwt(int(argv[0]), argv[1]))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
