#!/usr/bin/env python3
"""Start the Roof Edge Labeler API server."""

import uvicorn

from edgelabeler.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "edgelabeler.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        reload_dirs=["edgelabeler"],
    )
