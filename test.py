#!/usr/bin/env python3
"""
Smoke test script for a running LLM relay.
Exercises pre-flight, method rejection and a real completion using config.yml.
"""

import asyncio
import json
import os
from typing import Dict, Any

import httpx
import yaml

MODEL = os.environ.get("RELAY_TEST_MODEL", "deepseek/deepseek-chat:free")
STREAM = os.environ.get("RELAY_TEST_STREAM", "0") == "1"

def load_config() -> Dict[str, Any]:
    """Load configuration from config.yml"""
    try:
        with open("config.yml", encoding="utf-8") as file:
            return yaml.safe_load(file) or {}
    except FileNotFoundError:
        return {}

async def test_feature(feature_name: str, test_func: callable):
    """Run a feature test with formatted output"""
    print(f"\n=== Testing {feature_name} ===")
    try:
        await test_func()
        print(f"✅ {feature_name} test passed")
    except Exception as e:
        print(f"❌ {feature_name} test failed: {str(e)}")
        raise

async def test_preflight(client: httpx.AsyncClient, base_url: str):
    """Pre-flight must be answered by the relay itself"""
    resp = await client.options(base_url)
    assert resp.status_code == 204, f"Expected 204, got {resp.status_code}"
    assert resp.headers.get("access-control-allow-origin") == "*"

async def test_method_not_allowed(client: httpx.AsyncClient, base_url: str):
    """Anything but POST and OPTIONS is rejected"""
    resp = await client.get(base_url)
    assert resp.status_code == 405, f"Expected 405, got {resp.status_code}"
    print(resp.json()["error"])

async def test_completion(client: httpx.AsyncClient, base_url: str):
    """Relay a real prompt to OpenRouter"""
    request_data = {
        "prompt": "Hello!",
        "model_name": MODEL,
        "stream": STREAM,
        "title": "LLM Relay smoke test",
    }

    if STREAM:
        async with client.stream("POST", base_url, json=request_data) as resp:
            resp.raise_for_status()
            async for line in resp.aiter_lines():
                line = line.strip()
                if not line.startswith("data: "):
                    continue
                content = line[6:].strip()
                if content == "[DONE]":
                    continue
                try:
                    json.loads(content)
                    print(".", end="", flush=True)
                except json.JSONDecodeError:
                    print("", end="", flush=True)
        print("\nStream completed")
    else:
        resp = await client.post(base_url, json=request_data)
        resp.raise_for_status()
        print("Chat completion received")

async def run_tests():
    """Run all smoke tests"""
    server_config = load_config().get("server", {})

    host = server_config.get("host", "127.0.0.1")
    host = "127.0.0.1" if host == "0.0.0.0" else host
    port = server_config.get("port", 8787)
    base_url = os.environ.get("RELAY_URL", f"http://{host}:{port}/")

    async with httpx.AsyncClient(timeout=60.0) as client:
        await test_feature("Pre-flight", lambda: test_preflight(client, base_url))
        await test_feature("Method Not Allowed", lambda: test_method_not_allowed(client, base_url))
        await test_feature("Completion", lambda: test_completion(client, base_url))

if __name__ == "__main__":
    print("Running LLM Relay smoke tests")
    asyncio.run(run_tests())
