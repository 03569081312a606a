"""Seed the blog database with sample posts, likes and comments."""
import asyncio
import argparse
import random
import time

from app.database import engine, async_session, Base, dispose_engine
from app.schemas import CommentCreate, PostCreate
from app.services import comment_service, post_service

BADGES = ["news", "tutorial", "opinion", "release", "guide"]
AUTHORS = ["Ana", "Bruno", "Carla", "Diego", "Elena"]


async def seed(num_posts: int, reset: bool = False):
    print(f"Seeding: {num_posts} posts")
    start = time.perf_counter()

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    total_comments = 0
    async with async_session() as session:
        for i in range(num_posts):
            badge = random.choice(BADGES)
            post = await post_service.create_post(
                session,
                PostCreate(
                    title=f"Sample post {i}: a short {badge}",
                    slug=f"sample-post-{i}",
                    image_url=f"https://picsum.photos/seed/{i}/800/400",
                    content=f"This is the body of sample post {i}. " * 10,
                    excerpt=f"Excerpt for sample post {i}.",
                    author=random.choice(AUTHORS),
                    badge=badge,
                ),
            )
            for _ in range(random.randint(0, 5)):
                await post_service.add_like(session, post["id"])
            for _ in range(random.randint(0, 3)):
                await comment_service.add_comment(
                    session,
                    post["id"],
                    CommentCreate(name=random.choice(AUTHORS), comment="Nice read, thanks!"),
                )
                total_comments += 1

        await session.commit()

    await dispose_engine()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Posts: {num_posts}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--posts", type=int, default=20, help="Number of posts to create")
    parser.add_argument("--reset", action="store_true", help="Drop the blog tables first")
    args = parser.parse_args()
    asyncio.run(seed(args.posts, reset=args.reset))


if __name__ == "__main__":
    main()
