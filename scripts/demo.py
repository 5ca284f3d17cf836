#!/usr/bin/env python3
"""
Demo script for the mentor relay.

Sends a few requests to a running relay (``python -m code_mentor.api.app``)
and shows caching and rate limiting from the client's side.
"""

import sys
import time

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000"

SAMPLE = {
    "userCode": "class Solution {\npublic:\n    vector<int> twoSum(vector<int>& nums, int target) {\n"
    "        for (int i = 0; i < nums.size(); i++)\n            for (int j = i; j < nums.size(); j++)\n"
    "                if (nums[i] + nums[j] == target) return {i, j};\n        return {};\n    }\n};",
    "question": "Two Sum: return indices of the two numbers such that they add up to target.",
    "intent": "hint",
    "history": [],
    "language": "C++",
}


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def post(client: httpx.Client, body: dict) -> httpx.Response:
    start = time.time()
    response = client.post("/mentor", json=body)
    elapsed_ms = (time.time() - start) * 1000
    if response.status_code == 200:
        data = response.json()
        print(f"  200 in {elapsed_ms:7.1f} ms  fromCache={data['fromCache']}")
    else:
        print(f"  {response.status_code} in {elapsed_ms:7.1f} ms  {response.json().get('error')}")
    return response


def demo_cache(client: httpx.Client) -> None:
    print_section("Identical requests within 60s")
    first = post(client, SAMPLE)
    post(client, SAMPLE)
    if first.status_code == 200:
        print("\n" + first.json()["mentorText"])


def demo_complexity(client: httpx.Client) -> None:
    print_section("Complexity intent")
    response = post(client, {**SAMPLE, "intent": "complexity"})
    if response.status_code == 200:
        print("\n" + response.json()["mentorText"])


def demo_rate_limit(client: httpx.Client) -> None:
    print_section("Burst of requests from one address")
    for _ in range(11):
        post(client, SAMPLE)


def main() -> None:
    with httpx.Client(base_url=BASE_URL, timeout=60) as client:
        health = client.get("/health").json()
        print(f"Relay at {BASE_URL}: {health['status']} ({health['time']})")
        demo_cache(client)
        demo_complexity(client)
        demo_rate_limit(client)


if __name__ == "__main__":
    main()
