from app.boudoir.db.models import UserActivity
from app.boudoir.repos.base import Repository


class ActivityRepository(Repository):
    def create(self, activity: UserActivity) -> UserActivity:
        return self._save("activity.create", activity)
