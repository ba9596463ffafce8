#!/usr/bin/env python3
"""
Run the Punto Tactics web API server.
"""

import uvicorn

if __name__ == "__main__":
    print("Starting Punto Tactics Web API server...")
    print("Server will be available at: http://localhost:8000")
    print("API documentation at:  http://localhost:8000/docs")
    print("Press Ctrl+C to stop the server")

    uvicorn.run(
        "webapi.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True  # Enable auto-reload for development
    )
