import argparse

import uvicorn

from . import settings

def main():
    parser = argparse.ArgumentParser(description="Run the radio stream relay.")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    uvicorn.run("relay_api.main:app", host=args.host, port=args.port, reload=args.reload)

if __name__ == "__main__":
    main()
