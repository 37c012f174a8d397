from sqlalchemy import func, select

from app.boudoir.db.models import Follow, User
from app.boudoir.repos.base import Repository


class FollowRepository(Repository):
    def get(self, follower_id, following_id):
        stmt = select(Follow).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
        return self._run("follows.get", lambda: self.db.execute(stmt).scalars().first())

    def following_ids(self, follower_id) -> list:
        stmt = select(Follow.following_id).where(Follow.follower_id == follower_id)
        return self._run("follows.following_ids", lambda: self.db.execute(stmt).scalars().all())

    def follower_ids(self, following_id) -> list:
        stmt = select(Follow.follower_id).where(Follow.following_id == following_id)
        return self._run("follows.follower_ids", lambda: self.db.execute(stmt).scalars().all())

    def counts(self, user_id) -> tuple[int, int]:
        followers_stmt = select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
        following_stmt = select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)

        def operation():
            return (
                self.db.execute(followers_stmt).scalar_one(),
                self.db.execute(following_stmt).scalar_one(),
            )

        return self._run("follows.counts", operation)

    def _list_users(self, name: str, join_column, filter_column, user_id, limit, offset):
        stmt = (
            select(User, Follow.created_at)
            .join(Follow, join_column == User.id)
            .where(filter_column == user_id)
            .order_by(Follow.created_at.desc())
        )
        count_stmt = select(func.count()).select_from(Follow).where(filter_column == user_id)
        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).all()
            total = self.db.execute(count_stmt).scalar_one()
            return rows, total

        return self._run(name, operation)

    def list_followers(self, user_id, *, limit: int | None = None, offset: int | None = None):
        return self._list_users("follows.list_followers", Follow.follower_id, Follow.following_id, user_id, limit, offset)

    def list_following(self, user_id, *, limit: int | None = None, offset: int | None = None):
        return self._list_users("follows.list_following", Follow.following_id, Follow.follower_id, user_id, limit, offset)

    def create(self, follow: Follow) -> Follow:
        return self._save("follows.create", follow)

    def delete(self, follow: Follow) -> None:
        self._commit("follows.delete", lambda: self.db.delete(follow))
