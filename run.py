#!/usr/bin/env python3
"""Run script for SkillSwap."""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "skillswap.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
