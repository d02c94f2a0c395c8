#!/usr/bin/env python3
"""
Example concrete client built on apicore, talking to httpbin.org.

Each endpoint method is a one-liner into ``api_call`` and returns the
ResponseResult unchanged. Shows bearer auth from an env var, query params,
JSON and form payloads, raw diagnostics, and the async client.

Requirements:
- Optional: HTTPBIN_TOKEN environment variable (sent as a bearer token)

Usage:
    python examples/httpbin_client.py
"""

import asyncio
import logging

from apicore import ApiClient, AsyncApiClient, BearerAuth, ResponseResult, TransportError


class HttpbinClient(ApiClient):
    DEFAULT_BASE_URL = "https://httpbin.org"
    CREDENTIAL_ENV = {"token": "HTTPBIN_TOKEN"}
    AUTH = BearerAuth("token")
    CLIENT_NAME = "httpbin-example"
    CLIENT_VERSION = "0.1.0"

    def __init__(self, *, token: str | None = None, **kwargs):
        super().__init__(credentials={"token": token}, **kwargs)

    def get_anything(self, **query) -> ResponseResult:
        return self.api_call("GET", "/anything", query)

    def post_json(self, body: dict) -> ResponseResult:
        return self.api_call("POST", "/post", payload=body)

    def post_form(self, fields: dict) -> ResponseResult:
        return self.api_call(
            "POST",
            "/post",
            payload=fields,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

    def status(self, code: int) -> ResponseResult:
        return self.api_call("GET", f"/status/{code}")


class AsyncHttpbinClient(AsyncApiClient):
    DEFAULT_BASE_URL = "https://httpbin.org"

    async def get_anything(self, **query) -> ResponseResult:
        return await self.api_call("GET", "/anything", query)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    try:
        with HttpbinClient(token="example-token", include_raw=True) as client:
            result = client.get_anything(q="hello world", page=1)
            print("GET /anything ->", result.status_code, result.data["args"])
            print("sent to:", result.raw.request.url)

            result = client.post_json({"name": "widget", "tags": ["a", "b"]})
            print("POST json ->", result.status_code, result.data["json"])

            result = client.post_form({"name": "a b", "id": 5})
            print("POST form ->", result.status_code, result.data["form"])

            result = client.status(418)
            print("GET /status/418 ->", result.status_code, "ok" if result.ok else "not ok")
    except TransportError as e:
        print(f"Network error: {e}")
        return

    async def run_async() -> None:
        async with AsyncHttpbinClient() as client:
            result = await client.get_anything(mode="async")
            print("async GET /anything ->", result.status_code, result.data["args"])

    asyncio.run(run_async())


if __name__ == "__main__":
    main()
