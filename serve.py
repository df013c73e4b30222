#!/usr/bin/env python3
"""Main entry point for scoreboard."""

import asyncio
from scoreboard.main import main

if __name__ == "__main__":
    asyncio.run(main())
