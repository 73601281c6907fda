#!/usr/bin/env python3
"""Run the wordtiles API server."""

import os

import uvicorn


def main():
    host = os.environ.get('WORDTILES_HOST', '0.0.0.0')
    port = int(os.environ.get('WORDTILES_PORT', '8000'))
    print("Starting Wordtiles API server...")
    print(f"API documentation available at: http://localhost:{port}/docs")
    uvicorn.run(
        "server.app:app",
        host=host,
        port=port,
        reload=True
    )


if __name__ == "__main__":
    main()
