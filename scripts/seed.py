"""Database seeder: recreate the article table and load numbered sample articles."""
import asyncio
import argparse
import time

from sqlalchemy.ext.asyncio import AsyncEngine

from board.config import settings
from board.container import build_container
from board.database import create_schema
from board.logging_utils import setup_logging
from board.services.article_service import ArticleService


async def seed(count: int = 30, blind_from: int = 11, blind_to: int = 20, dev_mode: bool = False):
    container = build_container(settings.model_copy(update={"DEV_MODE": dev_mode}))
    engine = container.get(AsyncEngine)
    service = container.get(ArticleService)

    print(f"Seeding: {count} articles, blinded {blind_from}-{blind_to}")
    start = time.perf_counter()

    await create_schema(engine, drop_existing=True)

    blinded = 0
    for no in range(1, count + 1):
        is_blind = blind_from <= no <= blind_to
        await service.write(f"제목{no}", f"내용{no}", is_blind)
        blinded += is_blind

    total = await service.get_articles_count()
    await engine.dispose()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Articles: {total}")
    print(f"  Blinded: {blinded}")


def main():
    parser = argparse.ArgumentParser(description="Seed the article database")
    parser.add_argument("--count", type=int, default=30, help="Number of articles (default 30)")
    parser.add_argument("--blind-from", type=int, default=11, help="First blinded article number")
    parser.add_argument("--blind-to", type=int, default=20, help="Last blinded article number")
    parser.add_argument("--dev-mode", action="store_true", help="Log every SQL statement")
    args = parser.parse_args()
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed(args.count, args.blind_from, args.blind_to, args.dev_mode))


if __name__ == "__main__":
    main()
