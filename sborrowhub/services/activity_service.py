import json

from flask import current_app, request
from flask_jwt_extended import decode_token

from sborrowhub.constants import describe_activity
from sborrowhub.extensions import db
from sborrowhub.models.activity_log import ActivityLog
from sborrowhub.repositories.item_repo import ItemRepo
from sborrowhub.repositories.log_repo import LogRepo
from sborrowhub.repositories.user_repo import UserRepo

_REDACTED = {"password", "confirmpassword", "currentpassword"}


def _request_user_id() -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return "anonymous"
    try:
        return str(decode_token(header[7:]).get("sub") or "anonymous")
    except Exception:
        # expired or forged tokens are logged as anonymous
        return "anonymous"


def _request_details() -> str:
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        body = {k: ("***" if k.replace("_", "").lower() in _REDACTED else v) for k, v in body.items()}
    return json.dumps(body or {}, default=str)


class ActivityService:
    @staticmethod
    def record_request(response):
        """after_request hook: log every non-GET call, never failing the request."""
        if request.method in ("GET", "HEAD", "OPTIONS"):
            return response
        try:
            user_id = _request_user_id()
            LogRepo.add(ActivityLog(
                user_id=user_id,
                action=f"{request.method} {request.path}",
                ip=request.remote_addr,
                details=_request_details(),
            ))
            current_app.logger.info(f"[activity] {request.method} {request.path} user={user_id}")
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"[activity] Logging error: {e}")
        return response

    @staticmethod
    def recent_user_activity(limit: int = 20):
        """Feed of what regular users did lately, newest first."""
        out = []
        users = {}
        for log in LogRepo.recent(limit=500):
            if len(out) >= limit:
                break

            details = {}
            try:
                details = json.loads(log.details) if log.details else {}
            except ValueError:
                pass
            if not isinstance(details, dict):
                details = {}

            if "/auth/signup" in log.action:
                if not (details.get("firstname") and details.get("lastname")):
                    continue
                user_name = f"{details['firstname']} {details['lastname']}"
            else:
                if not log.user_id or log.user_id == "anonymous" or not log.user_id.isdigit():
                    continue
                if log.user_id not in users:
                    users[log.user_id] = UserRepo.get_by_id(int(log.user_id))
                user = users[log.user_id]
                if not user or user.role != "user":
                    continue
                user_name = user.fullname

            item_name = ""
            item_id = details.get("itemId")
            if isinstance(item_id, int):
                item = ItemRepo.get(item_id)
                item_name = item.name if item else ""

            kind, text = describe_activity(log.action, item_name)
            out.append({
                "id": log.id,
                "action": text,
                "userName": user_name,
                "item": item_name,
                "timestamp": log.timestamp.isoformat(),
                "type": kind,
            })
        return out
