import platform
import sys
from datetime import datetime
from importlib.metadata import version

import sqlalchemy
from flask import current_app

from sborrowhub.errors import ConflictError, NotFoundError, app_assert
from sborrowhub.extensions import db
from sborrowhub.repositories.borrow_request_repo import BorrowRequestRepo
from sborrowhub.repositories.item_repo import ItemRepo
from sborrowhub.repositories.log_repo import LogRepo
from sborrowhub.repositories.transaction_repo import TransactionRepo
from sborrowhub.repositories.user_repo import UserRepo
from sborrowhub.utils.clock import utcnow


class AdminService:
    @staticmethod
    def update_role(target_id: int, role: str, acting_admin_id: int):
        app_assert(target_id != acting_admin_id, ConflictError("You cannot change your own role"))
        user = UserRepo.get_by_id(target_id)
        app_assert(user, NotFoundError("User not found"))
        previous, user.role = user.role, role
        UserRepo.commit()
        current_app.logger.info(f"[admin] user={target_id} role {previous} -> {role} by={acting_admin_id}")
        return user

    @staticmethod
    def logs(page: int, per_page: int):
        page = max(1, page)
        per_page = min(max(1, per_page), 200)
        rows, total = LogRepo.page(page, per_page)
        return {
            "logs": [r.to_dict() for r in rows],
            "page": page,
            "perPage": per_page,
            "total": total,
        }

    @staticmethod
    def uptime():
        started = current_app.config["STARTED_AT"]
        seconds = int((utcnow() - started).total_seconds())
        return {"startedAt": started.isoformat(), "uptimeSeconds": seconds}

    @staticmethod
    def system_info():
        return {
            "python": sys.version.split()[0],
            "platform": platform.platform(),
            "flask": version("flask"),
            "sqlalchemy": sqlalchemy.__version__,
            "database": db.engine.dialect.name,
        }

    @staticmethod
    def dashboard_stats():
        now = utcnow()
        return {
            "totalUsers": UserRepo.count(),
            "totalOfficers": UserRepo.count("officer"),
            "totalAdmins": UserRepo.count("admin"),
            "totalItems": ItemRepo.count(),
            "pendingRequests": BorrowRequestRepo.count_by_status("pending"),
            "approvedRequests": BorrowRequestRepo.count_by_status("approved"),
            "rejectedRequests": BorrowRequestRepo.count_by_status("rejected"),
            "activeLoans": TransactionRepo.count_open(),
            "overdueLoans": TransactionRepo.count_overdue(now),
        }

    @staticmethod
    def officer_stats():
        now = utcnow()
        start_of_month = datetime(now.year, now.month, 1)
        return {
            "totalUsers": UserRepo.count("user"),
            "totalItems": ItemRepo.count(),
            "pendingRequests": BorrowRequestRepo.count_by_status("pending"),
            "activeLoans": TransactionRepo.count_open(),
            "overdueItems": TransactionRepo.count_overdue(now),
            "monthlyBorrows": BorrowRequestRepo.count_resolved_since("approved", start_of_month),
        }
