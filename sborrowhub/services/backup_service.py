# sborrowhub/services/backup_service.py
from __future__ import annotations

import gzip
import json
import os
from datetime import date, datetime
from decimal import Decimal

from flask import current_app
from sqlalchemy import Date, DateTime, Numeric
from werkzeug.utils import secure_filename

from sborrowhub.errors import NotFoundError, ValidationError, app_assert
from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow


def _encode(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Unserializable value: {type(value).__name__}")


def _decode(column, value):
    if value is None:
        return None
    if isinstance(column.type, DateTime) and isinstance(value, str):
        return datetime.fromisoformat(value)
    if isinstance(column.type, Date) and isinstance(value, str):
        return date.fromisoformat(value)
    if isinstance(column.type, Numeric) and not isinstance(value, Decimal):
        return Decimal(str(value))
    return value


def _size_mb(path: str) -> str:
    return f"{os.path.getsize(path) / (1024 * 1024):.2f} MB"


class BackupService:
    @staticmethod
    def backup_dir() -> str:
        path = current_app.config["BACKUP_DIR"]
        os.makedirs(path, exist_ok=True)
        return path

    @staticmethod
    def resolve(file_name: str) -> str:
        """Path of an existing backup; rejects anything outside BACKUP_DIR."""
        app_assert(
            file_name.endswith(".gz") and secure_filename(file_name) == file_name,
            ValidationError("Invalid backup file"),
        )
        path = os.path.join(BackupService.backup_dir(), file_name)
        app_assert(os.path.isfile(path), NotFoundError("Backup file not found"))
        return path

    @staticmethod
    def create() -> dict:
        now = utcnow()
        file_name = f"backup-{now.strftime('%Y-%m-%dT%H-%M-%S-%f')}.gz"
        path = os.path.join(BackupService.backup_dir(), file_name)

        payload = {"timestamp": now.isoformat(), "tables": {}}
        for table in db.metadata.sorted_tables:
            rows = db.session.execute(table.select()).mappings().all()
            payload["tables"][table.name] = [dict(r) for r in rows]

        try:
            with gzip.open(path, "wt", encoding="utf-8") as fh:
                json.dump(payload, fh, default=_encode)
        except Exception:
            if os.path.exists(path):
                os.remove(path)
            current_app.logger.exception(f"[backup] Failed to write {file_name}")
            raise

        current_app.logger.info(f"[backup] Created {file_name}")
        return {
            "fileName": file_name,
            "size": _size_mb(path),
            "createdAt": now.isoformat(),
        }

    @staticmethod
    def list_backups() -> list[dict]:
        folder = BackupService.backup_dir()
        out = []
        for name in os.listdir(folder):
            path = os.path.join(folder, name)
            if not name.endswith(".gz") or not os.path.isfile(path):
                continue
            mtime = os.path.getmtime(path)
            out.append({
                "fileName": name,
                "size": _size_mb(path),
                "createdAt": datetime.fromtimestamp(mtime).isoformat(),
                "_mtime": mtime,
            })
        out.sort(key=lambda b: (b["_mtime"], b["fileName"]), reverse=True)
        for b in out:
            b.pop("_mtime")
        return out

    @staticmethod
    def delete(file_name: str):
        path = BackupService.resolve(file_name)
        os.remove(path)
        current_app.logger.info(f"[backup] Deleted {file_name}")

    @staticmethod
    def restore(file_name: str) -> dict:
        path = BackupService.resolve(file_name)
        try:
            with gzip.open(path, "rt", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, EOFError, ValueError):
            raise ValidationError("Invalid backup file")

        tables = payload.get("tables") if isinstance(payload, dict) else None
        app_assert(isinstance(tables, dict), ValidationError("Invalid backup file"))
        try:
            for table in reversed(db.metadata.sorted_tables):
                db.session.execute(table.delete())
            for table in db.metadata.sorted_tables:
                rows = tables.get(table.name) or []
                if not rows:
                    continue
                cols = {c.name: c for c in table.columns}
                clean = [
                    {k: _decode(cols[k], v) for k, v in row.items() if k in cols}
                    for row in rows
                ]
                db.session.execute(table.insert(), clean)
            db.session.commit()
        except Exception:
            db.session.rollback()
            current_app.logger.exception(f"[backup] Restore from {file_name} failed")
            raise

        current_app.logger.info(f"[backup] Restored {file_name}")
        return {"fileName": file_name, "restoredAt": utcnow().isoformat()}
