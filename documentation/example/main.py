import asyncio
import logging
from collections.abc import AsyncIterator

from mapkit import EventualMap

USERS = (
    ("root", {"uid": 0}),
    ("alice", {"uid": 1000}),
    ("alice", {"uid": 1001}),
    ("bob", {"uid": 1002}),
)


async def fetch_users() -> AsyncIterator[tuple[str, dict[str, int]]]:
    for username, user in USERS:
        await asyncio.sleep(0.1)
        yield username, user


def bump(username: str, attempts: int, *_) -> str:
    return f"{username}{attempts}"


async def main():
    users = EventualMap(fetch_users(), bumper=bump)

    bob, nobody = await asyncio.gather(users.get("bob"), users.get("nobody"))
    print("bob:", bob, sep=" ")
    print("nobody:", nobody, sep=" ")

    final_map = await users.final_map
    print("Users:", dict(final_map), sep=" ")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
