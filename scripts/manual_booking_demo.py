# scripts/manual_booking_demo.py
"""
Smoke-test a running server: pick the first free slot of a date,
request it, confirm it, and show the slot list afterwards.

    uvicorn booking_portal.main:app --reload
    python scripts/manual_booking_demo.py --date 2025-01-06
"""

from __future__ import annotations

import argparse

import requests

DEMO_REQUESTER = "3f2b8c1e-9a4d-4c6e-8b7a-1d2e3f4a5b6c"


def run(base_url: str, day: str) -> None:
    slots = requests.get(f"{base_url}/availability/slots", params={"date": day}).json()["slots"]
    print(f"[demo] {len(slots)} free slots on {day}")
    if not slots:
        return

    first = slots[0]["start_time"][:5]
    resp = requests.post(
        f"{base_url}/meeting-requests",
        json={
            "requester_id": DEMO_REQUESTER,
            "requested_date": day,
            "start_time": first,
            "title": "Demo meeting",
        },
    )
    print("Submit:", resp.status_code, resp.json())
    if resp.status_code != 201:
        return

    resp = requests.post(f"{base_url}/meeting-requests/{resp.json()['id']}/confirm")
    print("Confirm:", resp.status_code, resp.json())

    slots = requests.get(f"{base_url}/availability/slots", params={"date": day}).json()["slots"]
    print(f"[demo] {len(slots)} free slots on {day} after booking {first}")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--base-url", default="http://127.0.0.1:8000")
    parser.add_argument("--date", required=True, help="YYYY-MM-DD")
    args = parser.parse_args()
    run(args.base_url, args.date)


if __name__ == "__main__":
    main()
