import argparse
import getpass

import uvicorn

from jobboard.config import settings
from jobboard.utils.security import hash_password


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(prog="jobboard", description="Job board API server")
    sub = parser.add_subparsers(dest="command")
    serve = sub.add_parser("serve", help="run the API server (default)")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    sub.add_parser("hash-password", help="print an argon2 hash for JOBBOARD_ADMIN_PASSWORD_HASH")
    args = parser.parse_args(argv)

    if args.command == "hash-password":
        password = getpass.getpass("Admin password: ")
        if password != getpass.getpass("Repeat password: "):
            parser.error("passwords do not match")
        print(hash_password(password))
        return

    uvicorn.run(
        "jobboard.main:app",
        host=getattr(args, "host", settings.host),
        port=getattr(args, "port", settings.port),
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
