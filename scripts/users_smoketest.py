"""Walk a running Users API through create/get/update/delete.

Start the server first (``users-api`` or ``uvicorn app.main:app --port 8080``).

Usage:
  USERS_API_URL=http://127.0.0.1:8080 python scripts/users_smoketest.py
"""

from __future__ import annotations

import json
import os

import requests


def main() -> int:
    base = (os.getenv("USERS_API_URL") or "http://127.0.0.1:8080").rstrip("/") + "/api/users"

    def call(name: str, method: str, url: str, payload: dict | None = None) -> requests.Response | None:
        try:
            r = requests.request(method, url, json=payload, timeout=10)
        except requests.exceptions.RequestException as e:
            print(f"{name}: request failed: {e.__class__.__name__}: {e}")
            return None

        print("=" * 80)
        print(name, r.status_code, r.headers.get("X-Request-ID", ""))
        if r.content:
            try:
                print(json.dumps(r.json(), indent=2)[:2000])
            except ValueError:
                print(r.text[:2000])
        return r

    r = call("create", "POST", base, {"first_name": "Ann", "last_name": "Lee", "biography": "engineer"})
    if r is None or r.status_code != 201:
        return 1
    user_id = r.json()["data"]["id"]

    call("get", "GET", f"{base}/{user_id}")
    call("update", "PUT", f"{base}/{user_id}", {"first_name": "Anne"})
    call("get (after update)", "GET", f"{base}/{user_id}")
    call("list", "GET", base)
    call("delete", "DELETE", f"{base}/{user_id}")

    r = call("get (after delete)", "GET", f"{base}/{user_id}")
    return 0 if r is not None and r.status_code == 404 else 1


if __name__ == "__main__":
    raise SystemExit(main())
