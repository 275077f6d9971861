#!/usr/bin/env python3
"""
fundcalc - Entry point for running the calculator API.

Usage:
    python main.py                     # Serve on [::]:8000
    python main.py --port 9000
"""

import argparse
import logging

import uvicorn

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="fundcalc portfolio allocation calculator")
    parser.add_argument("--host", default="::", help="Web server host")
    parser.add_argument("--port", type=int, default=8000, help="Web server port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    args = parser.parse_args()

    # Settings are initialized in the app's lifespan, on the serving event loop
    logger.info(f"Running web server on {args.host}:{args.port}")
    uvicorn.run("fundcalc.app:app", host=args.host, port=args.port, log_level="info", reload=args.reload)


if __name__ == "__main__":
    main()
