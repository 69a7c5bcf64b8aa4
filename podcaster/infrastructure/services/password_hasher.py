"""Password hashing capability backed by bcrypt."""

import asyncio

import bcrypt


class BcryptPasswordHasher:
    """Hashes and checks passwords with bcrypt.

    bcrypt is CPU bound, so both operations run in a worker thread to keep the
    event loop responsive.
    """

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def _hash_sync(self, password: str) -> str:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    @staticmethod
    def _verify_sync(password: str, hashed_password: str) -> bool:
        return bcrypt.checkpw(password.encode(), hashed_password.encode())

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._hash_sync, password)

    async def verify(self, password: str, hashed_password: str) -> bool:
        return await asyncio.to_thread(self._verify_sync, password, hashed_password)
