import argparse
import asyncio

import uvicorn

from readlog.config import load_settings
from readlog.database import create_engine, create_sessionmaker, create_tables
from readlog.log import build_logger
from readlog.seed import seed_user


async def _seed() -> None:
    settings = load_settings()
    logger = build_logger(settings)
    engine = create_engine(settings)
    try:
        await create_tables(engine)
        async with create_sessionmaker(engine)() as session:
            await seed_user(session, settings, logger)
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(prog="readlog")
    parser.add_argument("--seed", action="store_true", help="create the sample user and exit")
    args = parser.parse_args()

    if args.seed:
        asyncio.run(_seed())
        return

    settings = load_settings()
    uvicorn.run("readlog.app:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
