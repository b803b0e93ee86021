"""
secfetch — Hello World

Protect an application with Fetch Metadata, exempt one route by routing,
and try a few browser-shaped requests against it.  Needs httpx.
"""

import asyncio

import httpx
from starlette.responses import PlainTextResponse
from starlette.routing import Mount, Route, Router

from secfetch import protect, protect_log_only
from secfetch.sinks import InMemoryRequestLogger

# ─── Your endpoints ───


async def account(request):
    return PlainTextResponse("balance: 42\n")


async def public_api(request):
    return PlainTextResponse("public\n")


def build_app(guard):
    protected = Router(routes=[Route("/account", account, methods=["GET", "POST"])])
    return Router(
        routes=[
            # Registered outside the protected router: never checked.
            Route("/public-api", public_api, methods=["GET", "POST"]),
            Mount("/", app=guard(protected)),
        ]
    )


REQUESTS = [
    ("same-origin form post", "POST", "/account", {"sec-fetch-site": "same-origin", "sec-fetch-mode": "navigate"}),
    ("link from another site", "GET", "/account", {"sec-fetch-site": "cross-site", "sec-fetch-mode": "navigate"}),
    ("cross-site form post", "POST", "/account", {"sec-fetch-site": "cross-site", "sec-fetch-mode": "navigate"}),
    ("cross-site fetch()", "GET", "/account", {"sec-fetch-site": "cross-site", "sec-fetch-mode": "cors"}),
    ("cross-site fetch() to exempt route", "POST", "/public-api", {"sec-fetch-site": "cross-site", "sec-fetch-mode": "cors"}),
    ("old browser, no headers", "POST", "/account", {}),
]


async def replay(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://example.test") as client:
        for label, method, path, headers in REQUESTS:
            resp = await client.request(method, path, headers=headers)
            print(f"  {resp.status_code}  {label:<38} {resp.text.strip()}")


async def main():
    # ──────────────────────────────────────
    #  1. Log-only: nothing is blocked, would-be denials are recorded
    # ──────────────────────────────────────
    sink = InMemoryRequestLogger()
    print("── log-only ──")
    await replay(build_app(lambda app: protect_log_only(app, sink)))
    for record in sink.records:
        print(f"  [WOULD DENY] {record.method} {record.path} site={record.site} mode={record.mode}")

    # ──────────────────────────────────────
    #  2. Enforcing: cross-site requests get 403
    # ──────────────────────────────────────
    print("── enforce ──")
    await replay(build_app(protect))


if __name__ == "__main__":
    asyncio.run(main())
