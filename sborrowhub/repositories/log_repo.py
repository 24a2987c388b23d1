from sborrowhub.models.activity_log import ActivityLog
from sborrowhub.extensions import db


class LogRepo:
    @staticmethod
    def add(entry: ActivityLog):
        db.session.add(entry)
        db.session.commit()
        return entry

    @staticmethod
    def recent(limit: int = 200):
        return (
            ActivityLog.query
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def page(page: int, per_page: int):
        q = ActivityLog.query.order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
        total = q.count()
        rows = q.offset((page - 1) * per_page).limit(per_page).all()
        return rows, total
