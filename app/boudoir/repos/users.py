from datetime import datetime

from sqlalchemy import func, or_, select

from app.boudoir.db.models import User
from app.boudoir.repos.base import Repository


class UserRepository(Repository):
    def get_by_id(self, user_id):
        return self._run("users.get_by_id", lambda: self.db.get(User, user_id))

    def get_by_email(self, email: str):
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        return self._run("users.get_by_email", lambda: self.db.execute(stmt).scalars().first())

    def get_by_phone(self, phone: str):
        stmt = select(User).where(User.phone == phone)
        return self._run("users.get_by_phone", lambda: self.db.execute(stmt).scalars().first())

    def list_filtered(
        self,
        *,
        role: str | None = None,
        status: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ):
        stmt = select(User)
        count_stmt = select(func.count()).select_from(User)

        if role:
            normalized_role = role.strip().upper()
            stmt = stmt.where(User.role == normalized_role)
            count_stmt = count_stmt.where(User.role == normalized_role)

        if status:
            normalized_status = status.strip().upper()
            stmt = stmt.where(User.status == normalized_status)
            count_stmt = count_stmt.where(User.status == normalized_status)

        if search:
            pattern = f"%{search.strip()}%"
            search_filter = or_(User.name.ilike(pattern), User.email.ilike(pattern))
            stmt = stmt.where(search_filter)
            count_stmt = count_stmt.where(search_filter)

        sort_mapping = {
            "name": User.name,
            "email": User.email,
            "created_at": User.created_at,
            "last_login_at": User.last_login_at,
        }
        sort_column = sort_mapping.get(sort_by, User.created_at)
        stmt = stmt.order_by(sort_column.asc() if sort_order == "asc" else sort_column.desc(), User.id)

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        def operation():
            rows = self.db.execute(stmt).scalars().all()
            total = self.db.execute(count_stmt).scalar_one()
            return rows, total

        return self._run("users.list_filtered", operation)

    def list_by_ids(self, user_ids):
        if not user_ids:
            return []
        stmt = select(User).where(User.id.in_(list(user_ids)))
        return self._run("users.list_by_ids", lambda: self.db.execute(stmt).scalars().all())

    def create(self, user: User) -> User:
        return self._save("users.create", user)

    def update(self, user: User, **changes) -> User:
        return self._update("users.update", user, **changes)

    def update_password(self, user: User, hashed_password: str) -> User:
        return self._update("users.update_password", user, hashed_password=hashed_password)

    def record_login(self, user: User) -> User:
        return self._update("users.record_login", user, last_login_at=datetime.utcnow())
