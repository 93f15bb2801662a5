"""Command-line entrypoint that serves the editor."""

import argparse

import uvicorn


def main(argv: list[str] | None = None) -> None:
    """Run the editor web app."""
    parser = argparse.ArgumentParser(description="Thumbnail Editor web app")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args(argv)
    uvicorn.run(
        "thumbnail_editor.api.asgi:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
