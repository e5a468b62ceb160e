# src/nearstock/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and configures logging + CORS.
Business logic lives in `nearstock.fulfillment.service`.
"""

from __future__ import annotations

import os

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from nearstock.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="nearstock API", version="0.1.0")

# CORS: the storefront calls this API from the browser.
# - NEARSTOCK_CORS_ORIGINS="https://blue-city-store.myshopify.com,https://example.com"
# - NEARSTOCK_CORS_ALLOW_LOCAL=0 to disable the default localhost allowance
cors_origins = [s.strip() for s in os.getenv("NEARSTOCK_CORS_ORIGINS", "").split(",") if s.strip()]
cors_allow_local = os.getenv("NEARSTOCK_CORS_ALLOW_LOCAL", "1").strip().lower() in {"1", "true", "yes", "y"}
cors_origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$" if cors_allow_local else ""
if cors_origins or cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_origin_regex=cors_origin_regex or None,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

app.include_router(router)
