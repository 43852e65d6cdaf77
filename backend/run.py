"""
Quick start script for running the backend server.
Handles basic environment checks before starting.
"""

import os
import sys
import argparse
from pathlib import Path


def check_env_file():
    """Load .env if present and report whether the Gemini API key is set."""
    env_path = Path(__file__).parent / ".env"

    from dotenv import load_dotenv
    if env_path.exists():
        load_dotenv(env_path)
    else:
        print("NOTE: .env file not found, using process environment only")

    from suhbat.config import Settings

    if not Settings().api_key_configured:
        # Not fatal: /health reports the missing key and model calls fail cleanly
        print("WARNING: GEMINI_API_KEY is not configured!")
        print("  - Get API key: https://aistudio.google.com/app/apikey")
        print("  - Interview endpoints will return errors until it is set")
        return False

    print("✓ Environment configuration looks good")
    return True


def check_dependencies():
    """Check if required packages are installed."""
    required_packages = [
        "fastapi",
        "uvicorn",
        "pydantic_settings",
        "langchain_core",
        "langchain_google_genai",
        "tenacity",
        "prometheus_client",
    ]

    missing = []
    for package in required_packages:
        try:
            __import__(package)
        except ImportError:
            missing.append(package)

    if missing:
        print(f"ERROR: Missing required packages: {', '.join(missing)}")
        print("\nPlease install dependencies:")
        print("  pip install -e .")
        return False

    print("✓ All dependencies are installed")
    return True


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="SuhbatAI Interview Coach - Backend Server",
    )
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: $PORT or 3000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    args = parser.parse_args()

    print("=" * 60)
    print("  SuhbatAI Interview Coach - Backend Server")
    print("=" * 60)
    print()

    if not check_dependencies():
        sys.exit(1)

    check_env_file()

    port = args.port or int(os.getenv("PORT", "3000"))
    enable_reload = args.reload or os.getenv("UVICORN_RELOAD", "false").lower() == "true"

    print()
    print("API will be available at:")
    print(f"  - http://localhost:{port}")
    print(f"  - API docs: http://localhost:{port}/docs")
    print()
    print("Press CTRL+C to stop the server")
    print("=" * 60)
    print()

    import uvicorn
    uvicorn.run(
        "suhbat.main:build_default_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        reload=enable_reload,
        log_level="info",
        timeout_graceful_shutdown=5
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n" + "=" * 60)
        print("  Server stopped by user (CTRL+C)")
        print("=" * 60)
        sys.exit(0)
