import os

from flask import Blueprint, jsonify, send_from_directory

from sborrowhub.services.backup_service import BackupService
from sborrowhub.utils.decorators import role_required

backup_bp = Blueprint("backup", __name__)


@backup_bp.before_request
@role_required("admin")
def _admin_only():
    return None


@backup_bp.post("/create")
def create_backup():
    backup = BackupService.create()
    return jsonify({"success": True, "message": "Backup created successfully", "data": backup}), 201


@backup_bp.get("/list")
def list_backups():
    return jsonify({"success": True, "data": BackupService.list_backups()})


@backup_bp.get("/download/<file_name>")
def download_backup(file_name: str):
    path = BackupService.resolve(file_name)
    return send_from_directory(os.path.dirname(path), file_name, as_attachment=True)


@backup_bp.delete("/delete/<file_name>")
def delete_backup(file_name: str):
    BackupService.delete(file_name)
    return jsonify({"success": True, "message": "Backup deleted successfully", "fileName": file_name})


@backup_bp.post("/restore/<file_name>")
def restore_backup(file_name: str):
    result = BackupService.restore(file_name)
    return jsonify({"success": True, "message": "Database restored successfully", "data": result})
